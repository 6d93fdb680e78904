"""
formatting.py — Box-drawing renderer for error messages.

Every TranscriptError's message goes through format_error_message(), so the
CLI and any other caller that prints str(exc) gets the same framed output.
"""

from __future__ import annotations

_BOX_TOP = "╭─────────────── YouTube Transcript Error ───────────────╮"
_BOX_SPACER = "│                                                        │"
_BOX_BOTTOM = "╰────────────────────────────────────────────────────────╯"


def format_error_message(message: str) -> str:
    """
    Frame a (possibly multi-line) message in a fixed-width decorative box.

    The message body is indented two spaces on its first line and otherwise
    left untouched, so multi-line messages keep their own layout.

    Args:
        message: The plain message text.

    Returns:
        The framed message as a single string.
    """
    return "\n".join([
        _BOX_TOP,
        _BOX_SPACER,
        f"  {message}",
        _BOX_SPACER,
        _BOX_BOTTOM,
    ])
