"""A terminal screen model: cells, editing, history, selection, windows and shell command parsing."""

__version__ = "0.1.0"
__all__ = ["cells", "shellcommand", "selection", "editing", "screen", "screenwindow"]