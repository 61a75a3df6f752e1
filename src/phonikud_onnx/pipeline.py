"""
Diacritization pipeline.

text -> tokenizer -> alignment -> model -> decoder -> composer -> reconstructed text

A ``Phonikud`` instance only holds the read-only tokenizer and model. Every
call builds its own intermediate objects, so one instance can serve calls
from several threads.
"""

import logging
from typing import List, Optional, Sequence

from .alignment import AlignmentMap
from .composer import MarkComposer
from .decoder import LabelDecoder
from .errors import PhonikudError, PipelineError
from .inference import InferenceAdapter
from .labels import PHONIKUD_VOCABULARY, LabelVocabulary, PhoneticClass
from .normalize import extract_source_chars, has_hebrew_letters, remove_nikud
from .reconstruct import reconstruct_text
from .tokenizer import TokenizerAdapter
from .types import VocalizationMode

logger = logging.getLogger(__name__)


class Phonikud:
    """Adds nikud and phonetic marks to Hebrew text."""

    def __init__(
        self,
        model_path: str,
        tokenizer_path: str,
        vocabulary: LabelVocabulary = PHONIKUD_VOCABULARY,
        intra_threads: int = 4,
        providers: Optional[Sequence[str]] = None,
        **options,
    ):
        """
        Load the model and tokenizer.

        Args:
            model_path: Path to the ONNX model
            tokenizer_path: Path to tokenizer.json
            vocabulary: Label vocabulary the model was exported with
            intra_threads: onnxruntime intra-op threads
            providers: onnxruntime execution providers (CPU if None)
            **options: Decoding options, see ``_configure``

        Raises:
            LoadError: if either artifact cannot be loaded
        """
        tokenizer = TokenizerAdapter.from_file(tokenizer_path)
        inference = InferenceAdapter.from_file(
            model_path,
            vocabulary=vocabulary,
            intra_threads=intra_threads,
            providers=providers,
        )
        self._configure(tokenizer, inference, **options)
        logger.info("Model loaded successfully")

    @classmethod
    def from_components(
        cls,
        tokenizer: TokenizerAdapter,
        inference: InferenceAdapter,
        **options,
    ) -> 'Phonikud':
        """Build a pipeline around adapters that are already loaded."""
        instance = cls.__new__(cls)
        instance._configure(tokenizer, inference, **options)
        return instance

    @classmethod
    def from_config(cls, config) -> 'Phonikud':
        """Build a pipeline from a ``Config``."""
        return cls(
            config.model_path,
            config.tokenizer_path,
            intra_threads=config.intra_threads,
            providers=config.providers,
            point_threshold=config.point_threshold,
            phonetic_threshold=config.phonetic_threshold,
            exclusive_phonetic_groups=config.exclusive_phonetic_groups,
            strip_existing_marks=config.strip_existing_marks,
        )

    def _configure(
        self,
        tokenizer: TokenizerAdapter,
        inference: InferenceAdapter,
        point_threshold: float = 0.5,
        phonetic_threshold: float = 0.5,
        exclusive_phonetic_groups: Sequence[Sequence[PhoneticClass]] = (),
        strip_existing_marks: bool = True,
    ):
        self.tokenizer = tokenizer
        self.inference = inference
        self.decoder = LabelDecoder(
            point_threshold=point_threshold,
            phonetic_threshold=phonetic_threshold,
            exclusive_phonetic_groups=exclusive_phonetic_groups,
        )
        self.strip_existing_marks = strip_existing_marks
        self._closed = False

    def add_diacritics(
        self,
        text: str,
        mode: VocalizationMode = VocalizationMode.MALE,
        mark_matres_lectionis: Optional[str] = None,
    ) -> str:
        """
        Add nikud and phonetic marks to Hebrew text.

        Args:
            text: Plain Hebrew text (can contain mixed content)
            mode: ``VocalizationMode.MALE`` or ``VocalizationMode.HASER`` (or "male"/"haser")
            mark_matres_lectionis: Mark to put on alef/vav/yod read as a vowel, or None

        Returns:
            Text with marks after each Hebrew letter, other characters preserved

        Raises:
            PipelineError: if any stage fails; no partial output is returned
        """
        if self._closed:
            raise PhonikudError("Phonikud instance is closed")
        mode = VocalizationMode.parse(mode)

        if not has_hebrew_letters(text):
            return text
        if self.strip_existing_marks:
            text = remove_nikud(text)

        stage = 'tokenize'
        try:
            spans = self.tokenizer.tokenize(text)
            chars = extract_source_chars(text)

            stage = 'align'
            alignment = AlignmentMap.build(chars, spans)

            stage = 'infer'
            label_vectors = self.inference.infer([span.token_id for span in spans])

            stage = 'decode'
            tags = self.decoder.decode(chars, alignment, label_vectors)

            stage = 'compose'
            composer = MarkComposer(mode=mode, mark_matres_lectionis=mark_matres_lectionis)
            marks = composer.compose_all(chars, tags)

            stage = 'reconstruct'
            result = reconstruct_text(chars, marks)
        except PhonikudError as e:
            logger.error(f"Diacritization failed during {stage}: {e}")
            raise PipelineError(stage, e) from e

        logger.debug(
            f"Vocalized {len(chars)} characters over {len(spans)} tokens "
            f"({len(alignment.uncovered())} uncovered)"
        )
        return result

    def add_diacritics_batch(
        self,
        texts: List[str],
        mode: VocalizationMode = VocalizationMode.MALE,
        mark_matres_lectionis: Optional[str] = None,
    ) -> List[str]:
        """Add diacritics to multiple texts."""
        return [self.add_diacritics(text, mode, mark_matres_lectionis) for text in texts]

    def close(self):
        """Release the model and tokenizer."""
        if self._closed:
            return
        self.inference.close()
        self.tokenizer.close()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
