"""Rebuild the output text from source characters and their marks."""

from typing import Sequence

from .errors import AlignmentInconsistency
from .types import MarkSequence, SourceChar


def reconstruct_text(chars: Sequence[SourceChar], marks: Sequence[MarkSequence]) -> str:
    """
    Emit every source character followed by its marks.

    Base characters are never dropped or reordered, so the result is at least
    as long as the text the characters came from.
    """
    if len(chars) != len(marks):
        raise AlignmentInconsistency(
            f"Got {len(marks)} mark sequences for {len(chars)} characters"
        )

    result = []
    for char, char_marks in zip(chars, marks):
        result.append(char.char)
        if char_marks and not char.is_hebrew_letter:
            raise AlignmentInconsistency(f"Marks attached to non-letter at index {char.index}")
        result.extend(char_marks)
    return ''.join(result)
