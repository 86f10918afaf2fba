import io

import pytest
from colorama import Fore, Style

from stylish_mapped.style import UNDERLINE, UNDERLINE_OFF, Styler, strip_ansi


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def no_color_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("STYLISH_MAPPED_NO_COLOR", raising=False)


def test_disabled_styler_returns_text_unchanged():
    styler = Styler(enabled=False)
    for method in (styler.underline, styler.error, styler.warning, styler.dim, styler.bold):
        assert method("text") == "text"
    assert styler.emphasize("text", "error") == "text"


def test_enabled_styler_wraps_text():
    styler = Styler()
    assert styler.underline("a") == UNDERLINE + "a" + UNDERLINE_OFF
    assert styler.error("a") == Fore.RED + "a" + Fore.RESET
    assert styler.warning("a") == Fore.YELLOW + "a" + Fore.RESET
    assert styler.bold("a") == Style.BRIGHT + "a" + Style.NORMAL
    assert styler.emphasize("a", "warning") == Fore.YELLOW + Style.BRIGHT + "a" + Style.NORMAL + Fore.RESET


def test_visible_length_ignores_ansi_codes():
    styler = Styler()
    text = styler.emphasize(styler.underline("hello"), "error")
    assert strip_ansi(text) == "hello"
    assert styler.visible_length(text) == 5


def test_auto_mode_follows_the_stream(no_color_env):
    assert Styler.for_stream(FakeTTY()).enabled is True
    assert Styler.for_stream(io.StringIO()).enabled is False
    assert Styler.for_stream(None).enabled is False


def test_no_color_env_disables_auto(monkeypatch, no_color_env):
    monkeypatch.setenv("NO_COLOR", "1")
    assert Styler.for_stream(FakeTTY()).enabled is False
    assert Styler.for_stream(FakeTTY(), "always").enabled is True


def test_explicit_modes(no_color_env):
    assert Styler.for_stream(io.StringIO(), "always").enabled is True
    assert Styler.for_stream(FakeTTY(), "never").enabled is False
    with pytest.raises(ValueError):
        Styler.for_stream(FakeTTY(), "sometimes")
