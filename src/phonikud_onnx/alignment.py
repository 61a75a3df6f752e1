"""
Alignment between source characters and tokenizer spans.

Two parallel index tables:
- ``char_to_token[i]``: position of the token covering character i, or None
- ``token_to_chars[t]``: character indices covered by token t

Tokens that cover no characters (special tokens) never appear in
``token_to_chars``. A character covered by more than one token belongs to the
first one.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import AlignmentInconsistency
from .types import SourceChar, TokenSpan

logger = logging.getLogger(__name__)

CHAR_UNIT = 'char'
BYTE_UNIT = 'byte'


@dataclass
class AlignmentMap:
    char_to_token: List[Optional[int]]
    token_to_chars: Dict[int, List[int]]

    @classmethod
    def build(
        cls,
        chars: Sequence[SourceChar],
        spans: Sequence[TokenSpan],
        unit: str = CHAR_UNIT,
    ) -> 'AlignmentMap':
        """
        Build the map by walking the spans in order.

        Args:
            chars: Source characters of the tokenized text
            spans: Token spans in model input order
            unit: ``"char"`` if span offsets are character indices, ``"byte"`` for UTF-8 offsets

        Raises:
            AlignmentInconsistency: if a span points outside the text
        """
        if unit not in (CHAR_UNIT, BYTE_UNIT):
            raise ValueError(f"Unknown offset unit: {unit}")

        char_to_token: List[Optional[int]] = [None] * len(chars)
        token_to_chars: Dict[int, List[int]] = {}
        if unit == BYTE_UNIT:
            byte_starts, total = _byte_table(chars)

        for span in spans:
            if span.is_empty:
                continue
            if unit == BYTE_UNIT:
                start, end = _byte_range_to_chars(byte_starts, total, span)
            else:
                start, end = _check_char_range(chars, span)

            covered = []
            for index in range(start, end):
                if char_to_token[index] is None:
                    char_to_token[index] = span.position
                    covered.append(index)
                else:
                    logger.debug(
                        f"Character {index} split across tokens "
                        f"{char_to_token[index]} and {span.position}; keeping the first"
                    )
            if covered:
                token_to_chars[span.position] = covered

        return cls(char_to_token=char_to_token, token_to_chars=token_to_chars)

    def token_for_char(self, index: int) -> Optional[int]:
        if not 0 <= index < len(self.char_to_token):
            raise AlignmentInconsistency(f"Character index {index} out of range")
        return self.char_to_token[index]

    def chars_for_token(self, position: int) -> List[int]:
        return list(self.token_to_chars.get(position, []))

    def uncovered(self) -> List[int]:
        """Indices of characters no token covers."""
        return [index for index, token in enumerate(self.char_to_token) if token is None]


def _check_char_range(chars: Sequence[SourceChar], span: TokenSpan):
    if span.start < 0 or span.end > len(chars):
        raise AlignmentInconsistency(
            f"Token {span.position} spans [{span.start}, {span.end}) "
            f"outside text of {len(chars)} characters"
        )
    return span.start, span.end


def _byte_table(chars: Sequence[SourceChar]) -> Tuple[List[int], int]:
    """Byte offset of every character, and the byte length of the text."""
    byte_starts = [char.byte_offset for char in chars]
    total = 0
    if chars:
        last = chars[-1]
        total = last.byte_offset + len(last.char.encode('utf-8', errors='surrogatepass'))
    return byte_starts, total


def _byte_range_to_chars(byte_starts: List[int], total: int, span: TokenSpan):
    if span.start < 0 or span.end > total:
        raise AlignmentInconsistency(
            f"Token {span.position} spans bytes [{span.start}, {span.end}) "
            f"outside text of {total} bytes"
        )
    # A range that starts inside a character belongs to that character
    start = bisect.bisect_right(byte_starts, span.start) - 1
    end = bisect.bisect_left(byte_starts, span.end)
    return start, end
