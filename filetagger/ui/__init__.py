"""Console output package for filetagger."""

from .console_view import ConsoleView

__all__ = ["ConsoleView"]
