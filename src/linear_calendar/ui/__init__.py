"""PyQt6 desktop shell for the year view."""
