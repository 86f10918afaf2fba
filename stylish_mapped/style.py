# stylish_mapped/style.py

"""
Terminal styling for the stylish report, built on colorama's ANSI codes.

A disabled Styler returns every string unchanged, so the same rendering code
produces plain text for pipes, files and NO_COLOR environments.
"""

import os

from colorama import Fore, Style
from colorama.ansi import code_to_chars
from colorama.ansitowin32 import AnsiToWin32

from stylish_mapped.utils.settings import COLOR_MODES, ENV_DISABLE_COLORS

UNDERLINE = code_to_chars(4)
UNDERLINE_OFF = code_to_chars(24)

# colorama has no "gray"; bright black is what terminals render as gray.
GRAY = Fore.LIGHTBLACK_EX


def strip_ansi(text: str) -> str:
    return AnsiToWin32.ANSI_CSI_RE.sub("", text)


def colors_disabled_by_env() -> bool:
    return any(os.getenv(name) for name in ENV_DISABLE_COLORS)


class Styler:
    """
    :param enabled: when False every method returns its input unchanged
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    @classmethod
    def for_stream(cls, stream=None, mode: str = "auto") -> "Styler":
        """
        Pick colors for `stream`: "always" and "never" are honored as is,
        "auto" colors only a TTY and only when no NO_COLOR variable is set.
        """
        if mode not in COLOR_MODES:
            raise ValueError(f"Unknown color mode {mode!r}, expected one of {COLOR_MODES}")
        if mode == "always":
            return cls(True)
        if mode == "never" or colors_disabled_by_env():
            return cls(False)
        isatty = getattr(stream, "isatty", None)
        return cls(bool(isatty and isatty()))

    def _wrap(self, start: str, text: str, end: str) -> str:
        if not self.enabled:
            return text
        return f"{start}{text}{end}"

    def underline(self, text: str) -> str:
        return self._wrap(UNDERLINE, text, UNDERLINE_OFF)

    def error(self, text: str) -> str:
        return self._wrap(Fore.RED, text, Fore.RESET)

    def warning(self, text: str) -> str:
        return self._wrap(Fore.YELLOW, text, Fore.RESET)

    def dim(self, text: str) -> str:
        return self._wrap(GRAY, text, Fore.RESET)

    def bold(self, text: str) -> str:
        return self._wrap(Style.BRIGHT, text, Style.NORMAL)

    def level(self, text: str, level: str) -> str:
        """Color `text` as an "error" or a "warning"."""
        if level == "error":
            return self.error(text)
        return self.warning(text)

    def emphasize(self, text: str, level: str) -> str:
        """Bold `text` in the color of `level`."""
        return self.level(self.bold(text), level)

    @staticmethod
    def visible_length(text: str) -> int:
        return len(strip_ansi(text))
