import re
from typing import Optional

from config import OCR_CONFUSIONS
from .models import NormalizedText

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_INLINE_SPACE = re.compile(r"\s+")


def fix_confusions(text: str) -> str:
    """Replace characters OCR commonly misreads"""
    for wrong, right in OCR_CONFUSIONS:
        text = text.replace(wrong, right)
    return text


def normalize_text(raw: Optional[str]) -> NormalizedText:
    """
    Clean raw OCR output.

    Whitespace inside a line collapses to single spaces, blank lines are
    dropped and the confusion table is applied. The flattened view is the
    surviving lines joined with spaces.
    """
    if not raw:
        return NormalizedText()

    lines = []
    for line in _LINE_BREAK.split(raw):
        line = fix_confusions(_INLINE_SPACE.sub(" ", line)).strip()
        if line:
            lines.append(line)

    return NormalizedText(lines=tuple(lines), flat=" ".join(lines))


def normalize(raw: Optional[str]) -> str:
    return normalize_text(raw).flat
