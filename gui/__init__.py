"""
gui - PySide6 desktop interface for the Research File Renamer
"""

from .gui_entry import main

__all__ = ["main"]
