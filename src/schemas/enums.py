"""Shared enums used across extraction, overlay rendering and the CLI."""
from enum import Enum


class MarkupKind(str, Enum):
    """Overlay painted onto an extracted context image."""
    NONE = "none"
    HIGHLIGHT = "highlight"
    POPUP = "popup"


# How many border widths of surrounding context each markup keeps.
# Popups are small icons, so they get twice the context of text markup.
CONTEXT_MULTIPLIERS = {
    MarkupKind.NONE: 1.0,
    MarkupKind.HIGHLIGHT: 1.0,
    MarkupKind.POPUP: 2.0,
}


def context_multiplier(markup: MarkupKind) -> float:
    """Return the border multiplier for a markup kind."""
    return CONTEXT_MULTIPLIERS[MarkupKind(markup)]
