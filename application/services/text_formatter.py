# application/services/text_formatter.py
from __future__ import annotations

import html


def plain_text_to_html(text: str) -> str:
    """Escape markup and turn line breaks into <br /> so collaborator messages are safe to render."""
    if not text:
        return ""
    escaped = html.escape(text, quote=True)
    escaped = escaped.replace("\r\n", "\n").replace("\r", "\n")
    return escaped.replace("\n", "<br />")
