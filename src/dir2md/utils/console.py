"""Console output for the dir2md command line.

Rich output with a small set of retro themes; plain text when the stream is
not a terminal or NO_COLOR is set.
"""

import os
import sys
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Any

from rich.console import Console
from rich.theme import Theme
from rich.text import Text


class StatusType(Enum):
    """Standard status types with associated symbols."""
    SUCCESS = ("[✓]", "success", "green")
    ERROR = ("[x]", "error", "red")
    WARNING = ("[!]", "warning", "yellow")
    INFO = ("[!]", "info", "cyan")


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    info: str
    warning: str
    error: str
    success: str
    highlight: str
    path: str
    number: str
    dim: str


THEMES = {
    'manhattan': ThemeColors(
        info='cyan',
        warning='yellow',
        error='red',
        success='green',
        highlight='bright_cyan',
        path='white',
        number='bright_blue',
        dim='bright_black',
    ),
    'green': ThemeColors(
        info='green',
        warning='yellow',
        error='red',
        success='bright_green',
        highlight='bold green',
        path='bright_green',
        number='green',
        dim='green',
    ),
    'sunset': ThemeColors(
        info='orange3',
        warning='yellow',
        error='red3',
        success='green',
        highlight='bold orange1',
        path='wheat1',
        number='orange1',
        dim='grey50',
    ),
}


class ConsoleManager:
    """Console management with theme support and Rich/plain output."""

    def __init__(self, theme: str = "manhattan", file: Optional[Any] = None,
                 force_plain: bool = False):
        """Initialize console.

        Args:
            theme: Theme name from THEMES
            file: Output stream (defaults to sys.stdout)
            force_plain: Force plain output even on a color terminal
        """
        self.theme_name = theme
        self.theme_colors = THEMES.get(theme, THEMES['manhattan'])
        self.file = file or sys.stdout
        self.use_rich = not force_plain and self._should_use_rich_terminal()

        if self.use_rich:
            self.console = Console(
                theme=self._create_rich_theme(),
                file=self.file,
                highlight=False
            )
        else:
            self.console = None

    def _should_use_rich_terminal(self) -> bool:
        if os.environ.get('NO_COLOR'):
            return False
        if os.environ.get('FORCE_COLOR'):
            return True
        return hasattr(self.file, 'isatty') and self.file.isatty()

    def _create_rich_theme(self) -> Theme:
        colors = self.theme_colors
        return Theme({
            'info': colors.info,
            'warning': colors.warning,
            'error': colors.error,
            'success': colors.success,
            'highlight': colors.highlight,
            'path': colors.path,
            'number': colors.number,
            'dim': colors.dim,
        })

    def print(self, message: str, **kwargs):
        """Print with Rich markup, or as plain text with the markup stripped."""
        if self.use_rich:
            self.console.print(message, **kwargs)
        else:
            print(Text.from_markup(message).plain, file=self.file)

    def print_status(self, status: StatusType, message: str):
        """Print a status line with icon."""
        icon, _, color = status.value
        if self.use_rich:
            status_text = Text()
            status_text.append(f"{icon} ", style=color)
            status_text.append(message)
            self.console.print(status_text)
        else:
            print(f"{icon} {message}", file=self.file)

    def print_error(self, message: str):
        """Print an error message."""
        self.print_status(StatusType.ERROR, message)

    def print_success(self, message: str):
        """Print a success message."""
        self.print_status(StatusType.SUCCESS, message)

    def print_exception(self):
        """Print exception traceback with Rich formatting if available."""
        if self.use_rich:
            self.console.print_exception()
        else:
            import traceback
            traceback.print_exc(file=self.file)
