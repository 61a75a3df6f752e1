"""Data model for one diacritization run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Mapping, Tuple

if TYPE_CHECKING:
    from .labels import NiqqudClass, PhoneticClass, PointClass


class VocalizationMode(Enum):
    """Target orthography."""

    MALE = 'male'  # keep every vowel point
    HASER = 'haser'  # drop vowel points implied by a following mater lectionis

    @classmethod
    def parse(cls, value) -> 'VocalizationMode':
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True)
class SourceChar:
    """One character of the (cleaned) input text."""

    index: int
    byte_offset: int
    char: str
    is_hebrew_letter: bool


@dataclass(frozen=True)
class TokenSpan:
    """A tokenizer unit; ``start``/``end`` are offsets into the source, end exclusive."""

    position: int
    start: int
    end: int
    token_id: int

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class LabelVector:
    """Per-token class probabilities."""

    niqqud: Mapping['NiqqudClass', float]
    points: Mapping['PointClass', float]
    phonetics: Mapping['PhoneticClass', float]


@dataclass(frozen=True)
class CharTag:
    """Decoded marks for one Hebrew letter."""

    niqqud: 'NiqqudClass'
    points: FrozenSet['PointClass'] = field(default_factory=frozenset)
    phonetics: FrozenSet['PhoneticClass'] = field(default_factory=frozenset)


# Combining marks to place after one letter, in stacking order
MarkSequence = Tuple[str, ...]
