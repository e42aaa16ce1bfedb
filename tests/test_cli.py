from linear_calendar.cli import main, render_month
from linear_calendar.core.layout import layout_month

from conftest import make_local


def test_add_then_show_renders_clipped_bars(tmp_path, capsys):
    state = str(tmp_path / "state.json")
    assert main(["--state-file", state, "add", "Trip", "2024-01-30", "2024-02-02"]) == 0
    assert "Trip 2024-01-30..2024-02-02" in capsys.readouterr().out

    assert main(["--state-file", state, "show", "--year", "2024", "--month", "1"]) == 0
    january = capsys.readouterr().out
    assert january.startswith("Jan 2024")
    assert "[>  Trip" in january

    assert main(["--state-file", state, "show", "--year", "2024", "--month", "2"]) == 0
    february = capsys.readouterr().out
    assert "<]" in february and "Trip" in february


def test_list_filters_by_year(tmp_path, capsys):
    state = str(tmp_path / "state.json")
    main(["--state-file", state, "add", "Old", "2023-05-01"])
    main(["--state-file", state, "add", "New", "2024-05-01", "2024-05-03"])
    capsys.readouterr()

    assert main(["--state-file", state, "list", "--year", "2024"]) == 0
    out = capsys.readouterr().out
    assert "New" in out and "Old" not in out


def test_invalid_date_exits_with_status_two(tmp_path, capsys):
    assert main(["--state-file", str(tmp_path / "state.json"), "add", "Bad", "2024-02-30"]) == 2
    assert capsys.readouterr().err.startswith("error:")


def test_render_month_marks_single_day_events():
    lines = render_month(layout_month([make_local("day", "2024-03-03", "2024-03-03")], 2024, 3), 2024, 3)
    assert len(lines) == 2
    assert lines[1][9 + 2] == "#"


def test_holidays_command(tmp_path, capsys):
    assert main(["--state-file", str(tmp_path / "s.json"), "holidays", "--year", "2024", "--country", "US"]) == 0
    assert "2024-07-04" in capsys.readouterr().out


def test_holidays_command_lists_bank_holidays_for_a_subdivision(tmp_path, capsys):
    argv = ["--state-file", str(tmp_path / "s.json"), "holidays", "--year", "2024", "--country", "AU", "--subdiv", "NSW"]
    assert main(argv) == 0
    assert "2024-08-05  Bank Holiday" in capsys.readouterr().out
