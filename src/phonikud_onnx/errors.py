"""Exceptions raised by phonikud_onnx."""

from typing import Optional


class PhonikudError(Exception):
    """Base class for all errors raised by this package."""


class LoadError(PhonikudError):
    """Model or tokenizer artifact is missing, corrupt or incompatible."""


class TokenizationError(PhonikudError):
    """The tokenizer rejected the input text."""


class InferenceError(PhonikudError):
    """The inference runtime failed or returned an unexpected shape."""


class AlignmentInconsistency(PhonikudError):
    """A token/character index fell outside its valid range."""


class PipelineError(PhonikudError):
    """
    A pipeline stage failed while adding diacritics.

    Attributes:
        stage: Name of the failing stage
        cause: The error raised by that stage
    """

    def __init__(self, stage: str, cause: Optional[BaseException] = None):
        self.stage = stage
        self.cause = cause
        message = f"{stage} failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
