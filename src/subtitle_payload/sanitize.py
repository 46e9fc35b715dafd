from __future__ import annotations

import re

BOM = "\uFEFF"
LEADING_JUNK_RE = re.compile("^[\uFFFD\x00-\x08\x0b\x0c\x0e-\x1f]+")
CRLF_RE = re.compile(r"\r+\n")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def sanitize_text(text: str) -> str:
    """Normalize decoded subtitle text; applying it twice changes nothing."""
    if not text:
        return ""
    if text.startswith(BOM):
        text = text[1:]
    text = LEADING_JUNK_RE.sub("", text)
    # A BOM hidden behind leading junk would otherwise survive the first pass.
    while text.startswith(BOM):
        text = LEADING_JUNK_RE.sub("", text[1:])
    text = CRLF_RE.sub("\n", text)
    text = BLANK_RUN_RE.sub("\n\n", text)
    return text
