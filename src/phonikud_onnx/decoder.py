"""
Label decoder.

Chooses discrete marks for every Hebrew letter from the label vector of the
token that covers it.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .alignment import AlignmentMap
from .constants import CAN_HAVE_SIN
from .errors import AlignmentInconsistency
from .labels import NiqqudClass, PhoneticClass, PointClass
from .types import CharTag, LabelVector, SourceChar

logger = logging.getLogger(__name__)


class LabelDecoder:
    """
    Decoding rules:
    - Vowel point: argmax over the mutually exclusive niqqud classes
    - Dagesh: probability above ``point_threshold``
    - Shin/sin dot: shin only; the more probable dot if it passes ``point_threshold``
    - Phonetic classes: each independent above ``phonetic_threshold``, except inside
      an exclusive group where only the most probable passing member is kept
    """

    def __init__(
        self,
        point_threshold: float = 0.5,
        phonetic_threshold: float = 0.5,
        exclusive_phonetic_groups: Sequence[Sequence[PhoneticClass]] = (),
    ):
        self.point_threshold = point_threshold
        self.phonetic_threshold = phonetic_threshold
        self.exclusive_phonetic_groups: Tuple[Tuple[PhoneticClass, ...], ...] = tuple(
            tuple(group) for group in exclusive_phonetic_groups
        )

    def decode(
        self,
        chars: Sequence[SourceChar],
        alignment: AlignmentMap,
        label_vectors: Sequence[LabelVector],
    ) -> List[Optional[CharTag]]:
        """
        Decode one CharTag per source character.

        Returns:
            A list parallel to ``chars``; None for characters that get no marks

        Raises:
            AlignmentInconsistency: if a character maps to a token with no label vector
        """
        tags: List[Optional[CharTag]] = []
        for char in chars:
            position = alignment.token_for_char(char.index)
            if not char.is_hebrew_letter or position is None:
                tags.append(None)
                continue
            if not 0 <= position < len(label_vectors):
                raise AlignmentInconsistency(
                    f"Character {char.index} maps to token {position} "
                    f"but only {len(label_vectors)} label vectors exist"
                )
            tags.append(self.decode_vector(char.char, label_vectors[position]))
        return tags

    def decode_vector(self, letter: str, vector: LabelVector) -> CharTag:
        """Decode the marks for a single letter."""
        niqqud = NiqqudClass.NONE
        if vector.niqqud:
            niqqud = max(vector.niqqud.items(), key=lambda item: item[1])[0]

        points = set()
        if vector.points.get(PointClass.DAGESH, 0.0) > self.point_threshold:
            points.add(PointClass.DAGESH)

        if letter in CAN_HAVE_SIN:
            dot = max(
                (PointClass.SHIN_DOT, PointClass.SIN_DOT),
                key=lambda point: vector.points.get(point, 0.0),
            )
            if vector.points.get(dot, 0.0) > self.point_threshold:
                points.add(dot)

        return CharTag(
            niqqud=niqqud,
            points=frozenset(points),
            phonetics=frozenset(self._decode_phonetics(vector)),
        )

    def _decode_phonetics(self, vector: LabelVector) -> set:
        passing = {
            phonetic
            for phonetic, prob in vector.phonetics.items()
            if prob > self.phonetic_threshold
        }
        for group in self.exclusive_phonetic_groups:
            members = [phonetic for phonetic in group if phonetic in passing]
            if len(members) > 1:
                best = max(members, key=lambda phonetic: vector.phonetics[phonetic])
                passing.difference_update(member for member in members if member is not best)
        return passing
