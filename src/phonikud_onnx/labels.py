"""
Label vocabulary of the nikud model.

The model predicts three heads per token:
- Nikud (joint vowel point + dagesh classes)
- Shin (shin dot vs. sin dot)
- Additional phonetic channels (independent binary outputs)

The classes are closed enumerations, and ``LabelVocabulary`` maps the model's
output indices onto them. A model whose output widths do not match its
vocabulary is rejected when it is loaded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .constants import (
    SHVA, HATAF_SEGOL, HATAF_PATAH, HATAF_QAMATS, I_HIRIK, E_TSERE, SEGOL,
    A_PATAH, QAMATS, O_HOLAM, HOLAM_HASER, U_QUBUT, QAMATS_QATAN,
    DAGESH, SHIN_DOT, S_SIN,
    STRESS_HATAMA, GLOTTAL_STOP, VOCAL_SHVA, PREFIX,
)
from .types import LabelVector


class NiqqudClass(Enum):
    """Mutually exclusive vowel point classes."""

    NONE = 'none'
    MAT_LECT = 'mat_lect'
    SHVA = 'shva'
    HATAF_SEGOL = 'hataf_segol'
    HATAF_PATAH = 'hataf_patah'
    HATAF_QAMATS = 'hataf_qamats'
    HIRIK = 'hirik'
    TSERE = 'tsere'
    SEGOL = 'segol'
    PATAH = 'patah'
    QAMATS = 'qamats'
    HOLAM = 'holam'
    HOLAM_HASER = 'holam_haser'
    QUBUTS = 'qubuts'
    QAMATS_QATAN = 'qamats_qatan'


class PointClass(Enum):
    """Points that may combine with a vowel point."""

    DAGESH = 'dagesh'
    SHIN_DOT = 'shin_dot'
    SIN_DOT = 'sin_dot'


class PhoneticClass(Enum):
    """Phonetic annotations, listed in the order they are stacked."""

    STRESS = 'stress'
    GLOTTAL_STOP = 'glottal_stop'
    SHVA_NA = 'shva_na'
    PREFIX = 'prefix'


# Unicode for each class. NONE and MAT_LECT have no fixed code point.
NIQQUD_TO_CHAR = {
    NiqqudClass.SHVA: SHVA,
    NiqqudClass.HATAF_SEGOL: HATAF_SEGOL,
    NiqqudClass.HATAF_PATAH: HATAF_PATAH,
    NiqqudClass.HATAF_QAMATS: HATAF_QAMATS,
    NiqqudClass.HIRIK: I_HIRIK,
    NiqqudClass.TSERE: E_TSERE,
    NiqqudClass.SEGOL: SEGOL,
    NiqqudClass.PATAH: A_PATAH,
    NiqqudClass.QAMATS: QAMATS,
    NiqqudClass.HOLAM: O_HOLAM,
    NiqqudClass.HOLAM_HASER: HOLAM_HASER,
    NiqqudClass.QUBUTS: U_QUBUT,
    NiqqudClass.QAMATS_QATAN: QAMATS_QATAN,
}

POINT_TO_CHAR = {
    PointClass.DAGESH: DAGESH,
    PointClass.SHIN_DOT: SHIN_DOT,
    PointClass.SIN_DOT: S_SIN,
}

PHONETIC_TO_CHAR = {
    PhoneticClass.STRESS: STRESS_HATAMA,
    PhoneticClass.GLOTTAL_STOP: GLOTTAL_STOP,
    PhoneticClass.SHVA_NA: VOCAL_SHVA,
    PhoneticClass.PREFIX: PREFIX,
}

PHONETIC_ORDER = tuple(PhoneticClass)

_VOWEL_POINTS = (
    NiqqudClass.SHVA,
    NiqqudClass.HATAF_SEGOL,
    NiqqudClass.HATAF_PATAH,
    NiqqudClass.HATAF_QAMATS,
    NiqqudClass.HIRIK,
    NiqqudClass.TSERE,
    NiqqudClass.SEGOL,
    NiqqudClass.PATAH,
    NiqqudClass.QAMATS,
    NiqqudClass.HOLAM,
    NiqqudClass.HOLAM_HASER,
    NiqqudClass.QUBUTS,
)


def _phonikud_nikud_classes() -> Tuple[Tuple[NiqqudClass, bool], ...]:
    classes = [
        (NiqqudClass.NONE, False),
        (NiqqudClass.MAT_LECT, False),
        (NiqqudClass.NONE, True),  # dagesh only
    ]
    classes += [(vowel, False) for vowel in _VOWEL_POINTS]
    classes += [(vowel, True) for vowel in _VOWEL_POINTS]
    classes += [
        (NiqqudClass.QAMATS_QATAN, False),
        (NiqqudClass.QAMATS_QATAN, True),
    ]
    return tuple(classes)


def softmax(logits: np.ndarray) -> np.ndarray:
    """Softmax over the last axis."""
    shifted = logits - np.max(logits, axis=-1, keepdims=True)
    exp = np.exp(shifted)
    return exp / np.sum(exp, axis=-1, keepdims=True)


def sigmoid(logits: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-logits))


@dataclass(frozen=True)
class LabelVocabulary:
    """
    Index tables for one model artifact.

    Attributes:
        nikud_classes: (vowel point, has dagesh) for every index of the nikud head
        shin_classes: point for every index of the shin head
        phonetic_channels: phonetic class for every channel of the additional head
    """

    name: str
    nikud_classes: Tuple[Tuple[NiqqudClass, bool], ...]
    shin_classes: Tuple[PointClass, ...]
    phonetic_channels: Tuple[PhoneticClass, ...]

    @property
    def widths(self) -> Tuple[int, int, int]:
        """Expected last-axis width of each output head."""
        return len(self.nikud_classes), len(self.shin_classes), len(self.phonetic_channels)

    def label_vectors(
        self,
        nikud_logits: np.ndarray,
        shin_logits: np.ndarray,
        additional_logits: np.ndarray,
    ) -> Sequence[LabelVector]:
        """
        Convert raw per-token logits into LabelVectors.

        Args:
            nikud_logits: [seq_len, len(nikud_classes)]
            shin_logits: [seq_len, len(shin_classes)]
            additional_logits: [seq_len, len(phonetic_channels)]

        Returns:
            One LabelVector per token position
        """
        nikud_probs = softmax(nikud_logits.astype(np.float64))
        shin_probs = softmax(shin_logits.astype(np.float64))
        phonetic_probs = sigmoid(additional_logits.astype(np.float64))

        vectors = []
        for position in range(nikud_probs.shape[0]):
            niqqud: Dict[NiqqudClass, float] = {}
            dagesh = 0.0
            # The nikud head is joint over (vowel, dagesh); fold it into marginals
            for index, (vowel, has_dagesh) in enumerate(self.nikud_classes):
                prob = float(nikud_probs[position, index])
                niqqud[vowel] = niqqud.get(vowel, 0.0) + prob
                if has_dagesh:
                    dagesh += prob

            points = {PointClass.DAGESH: dagesh}
            for index, point in enumerate(self.shin_classes):
                points[point] = float(shin_probs[position, index])

            phonetics = {
                phonetic: float(phonetic_probs[position, index])
                for index, phonetic in enumerate(self.phonetic_channels)
            }
            vectors.append(LabelVector(niqqud=niqqud, points=points, phonetics=phonetics))

        return vectors


# Vocabulary shipped with phonikud-1.0 ONNX models
PHONIKUD_VOCABULARY = LabelVocabulary(
    name='phonikud-1.0',
    nikud_classes=_phonikud_nikud_classes(),
    shin_classes=(PointClass.SHIN_DOT, PointClass.SIN_DOT),
    phonetic_channels=(PhoneticClass.STRESS, PhoneticClass.SHVA_NA, PhoneticClass.PREFIX),
)


def parse_phonetic_groups(text: Optional[str]) -> Tuple[Tuple[PhoneticClass, ...], ...]:
    """
    Parse exclusive phonetic groups from text like ``"stress+shva_na,prefix+glottal_stop"``.

    Raises:
        ValueError: on an unknown phonetic class name
    """
    if not text:
        return ()
    groups = []
    for group in text.split(','):
        names = [name.strip() for name in group.split('+') if name.strip()]
        if names:
            groups.append(tuple(PhoneticClass(name) for name in names))
    return tuple(groups)
