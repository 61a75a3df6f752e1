"""Add Hebrew nikud and phonetic marks to plain Hebrew text."""

from .config import Config
from .errors import (
    AlignmentInconsistency,
    InferenceError,
    LoadError,
    PhonikudError,
    PipelineError,
    TokenizationError,
)
from .labels import PHONIKUD_VOCABULARY, LabelVocabulary, NiqqudClass, PhoneticClass, PointClass
from .pipeline import Phonikud
from .types import VocalizationMode

__all__ = [
    "AlignmentInconsistency",
    "Config",
    "InferenceError",
    "LabelVocabulary",
    "LoadError",
    "NiqqudClass",
    "PHONIKUD_VOCABULARY",
    "PhoneticClass",
    "Phonikud",
    "PhonikudError",
    "PipelineError",
    "PointClass",
    "TokenizationError",
    "VocalizationMode",
]
