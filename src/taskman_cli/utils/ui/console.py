"""Console utilities for taskman.

Consoles are created before configuration is read, so the ``output.color``
setting is applied afterwards through ``apply_color_setting``.
"""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


def apply_color_setting(color: bool) -> None:
    """Enable or disable colour on every console handed out."""
    for highlight in (True, False):
        get_console(highlight).no_color = not color
