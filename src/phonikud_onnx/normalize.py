"""
Input normalization for Hebrew text.

Strips marks that are already present so a vocalized input is re-vocalized
instead of double-marked, and splits the cleaned text into SourceChars.
"""

import re
import unicodedata
from typing import List

from .constants import ALEF, TAF, MARKS_START, MARKS_END, PREFIX
from .types import SourceChar

# A prefix separator is only a mark when it sits on a Hebrew letter or mark
_PREFIX_PATTERN = re.compile(
    '(?<=[' + ALEF + '-' + TAF + MARKS_START + '-' + MARKS_END + '])' + re.escape(PREFIX) + '+'
)


def is_hebrew_letter(char: str) -> bool:
    """Return True for the base letters alef..tav, final forms included."""
    return ALEF <= char <= TAF


def is_hebrew_mark(char: str) -> bool:
    """Return True for combining Hebrew points and accents (not maqaf, paseq, sof pasuq)."""
    return MARKS_START <= char <= MARKS_END and unicodedata.combining(char) != 0


def has_hebrew_letters(text: str) -> bool:
    return any(is_hebrew_letter(char) for char in text)


def remove_nikud(text: str) -> str:
    """Remove nikud, accents and prefix separators from Hebrew text."""
    text = _PREFIX_PATTERN.sub('', text)
    return ''.join(char for char in text if not is_hebrew_mark(char))


def extract_source_chars(text: str) -> List[SourceChar]:
    """Split text into SourceChars with their UTF-8 byte offsets."""
    chars = []
    byte_offset = 0
    for index, char in enumerate(text):
        chars.append(SourceChar(
            index=index,
            byte_offset=byte_offset,
            char=char,
            is_hebrew_letter=is_hebrew_letter(char),
        ))
        byte_offset += len(char.encode('utf-8', errors='surrogatepass'))
    return chars
