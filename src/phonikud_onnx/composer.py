"""
Mark composer.

Turns a CharTag into concrete combining marks, stacked in a fixed order:
shin/sin dot, dagesh, vowel point, then phonetic marks. The mode only decides
which marks are present, never their order.
"""

from typing import FrozenSet, List, Optional, Sequence, Tuple

from .constants import LETTERS, MATRES_LETTERS, VAV, YOD
from .labels import (
    NIQQUD_TO_CHAR, PHONETIC_ORDER, PHONETIC_TO_CHAR, POINT_TO_CHAR,
    NiqqudClass, PointClass,
)
from .types import CharTag, MarkSequence, SourceChar, VocalizationMode

POINT_ORDER = (PointClass.SHIN_DOT, PointClass.SIN_DOT, PointClass.DAGESH)

# (vowel point, following letter) pairs where the following letter already spells the vowel
HASER_REDUNDANT: FrozenSet[Tuple[NiqqudClass, str]] = frozenset({
    (NiqqudClass.HIRIK, YOD),
    (NiqqudClass.TSERE, YOD),
    (NiqqudClass.HOLAM, VAV),
    (NiqqudClass.QUBUTS, VAV),
})


def is_redundant_in_haser(
    letter: str,
    niqqud: NiqqudClass,
    next_letter: Optional[str],
) -> bool:
    """
    Return True if the vowel point on ``letter`` is dropped in haser spelling.

    A point is redundant when the next letter is the mater lectionis of that
    vowel. The lookup only sees the letter pair, so the same pair is reduced
    wherever it occurs.
    """
    if next_letter is None or letter not in LETTERS:
        return False
    return (niqqud, next_letter) in HASER_REDUNDANT


class MarkComposer:
    """Builds MarkSequences for one vocalization mode."""

    def __init__(
        self,
        mode: VocalizationMode = VocalizationMode.MALE,
        mark_matres_lectionis: Optional[str] = None,
    ):
        """
        Args:
            mode: Target orthography
            mark_matres_lectionis: Mark to put on alef/vav/yod read as a vowel, or None
        """
        self.mode = mode
        self.mark_matres_lectionis = mark_matres_lectionis

    def compose(
        self,
        letter: str,
        tag: Optional[CharTag],
        next_letter: Optional[str] = None,
    ) -> MarkSequence:
        """
        Compose the marks that follow ``letter``.

        Args:
            letter: The Hebrew letter
            tag: Its decoded tag
            next_letter: The character right after it, if any
        """
        if tag is None:
            return ()

        marks = [POINT_TO_CHAR[point] for point in POINT_ORDER if point in tag.points]

        vowel = self._vowel_mark(letter, tag.niqqud, next_letter)
        if vowel:
            marks.append(vowel)

        marks.extend(
            PHONETIC_TO_CHAR[phonetic] for phonetic in PHONETIC_ORDER if phonetic in tag.phonetics
        )
        return tuple(marks)

    def compose_all(
        self,
        chars: Sequence[SourceChar],
        tags: Sequence[Optional[CharTag]],
    ) -> List[MarkSequence]:
        """Compose the marks for every character; parallel to ``chars``."""
        sequences = []
        for index, (char, tag) in enumerate(zip(chars, tags)):
            next_letter = chars[index + 1].char if index + 1 < len(chars) else None
            sequences.append(self.compose(char.char, tag, next_letter))
        return sequences

    def _vowel_mark(
        self,
        letter: str,
        niqqud: NiqqudClass,
        next_letter: Optional[str],
    ) -> Optional[str]:
        if niqqud is NiqqudClass.MAT_LECT:
            # Never on letters that cannot be matres lectionis
            if letter in MATRES_LETTERS:
                return self.mark_matres_lectionis
            return None

        if self.mode is VocalizationMode.HASER:
            if is_redundant_in_haser(letter, niqqud, next_letter):
                return None

        return NIQQUD_TO_CHAR.get(niqqud)
