"""
Inference adapter for the ONNX nikud model.

The model is a black box with a fixed contract: N token ids in, one label
vector per token out. Logits are converted to probabilities here so the rest
of the pipeline never touches raw tensors.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import onnxruntime as ort

from .errors import InferenceError, LoadError
from .labels import PHONIKUD_VOCABULARY, LabelVocabulary
from .types import LabelVector

logger = logging.getLogger(__name__)

HEAD_NAMES = ('nikud', 'shin', 'additional')


class InferenceAdapter:
    """Runs the nikud model over token ids."""

    def __init__(self, session, vocabulary: LabelVocabulary = PHONIKUD_VOCABULARY):
        """
        Args:
            session: An ``onnxruntime.InferenceSession`` (or anything with the same
                ``get_inputs``/``get_outputs``/``run`` methods)
            vocabulary: Label vocabulary the model was trained with

        Raises:
            LoadError: if the model's outputs do not match the vocabulary
        """
        self.session = session
        self.vocabulary = vocabulary
        self.input_names = [node.name for node in session.get_inputs()]
        self._check_outputs()

    @classmethod
    def from_file(
        cls,
        model_path: str,
        vocabulary: LabelVocabulary = PHONIKUD_VOCABULARY,
        intra_threads: int = 4,
        providers: Optional[Sequence[str]] = None,
    ) -> 'InferenceAdapter':
        """
        Load an ONNX model.

        Raises:
            LoadError: if the file is missing, corrupt or incompatible
        """
        path = Path(model_path)
        if not path.is_file():
            raise LoadError(f"Model file not found: {path}")

        logger.info(f"Loading model from {path}")
        options = ort.SessionOptions()
        options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        options.intra_op_num_threads = intra_threads
        try:
            session = ort.InferenceSession(
                str(path),
                sess_options=options,
                providers=list(providers) if providers else ['CPUExecutionProvider'],
            )
        except Exception as e:
            raise LoadError(f"Model load error: {e}") from e
        return cls(session, vocabulary)

    def _check_outputs(self):
        outputs = self.session.get_outputs()
        if len(outputs) < len(HEAD_NAMES):
            raise LoadError(
                f"Model has {len(outputs)} outputs, expected {len(HEAD_NAMES)} "
                f"({', '.join(HEAD_NAMES)})"
            )
        if 'input_ids' not in self.input_names:
            raise LoadError(f"Model has no input_ids input (inputs: {self.input_names})")

        for head, node, width in zip(HEAD_NAMES, outputs, self.vocabulary.widths):
            shape = getattr(node, 'shape', None) or []
            # Dynamic axes are reported as strings or None
            if shape and isinstance(shape[-1], int) and shape[-1] != width:
                raise LoadError(
                    f"Model {head} head has {shape[-1]} classes but vocabulary "
                    f"{self.vocabulary.name} defines {width}"
                )

    def infer(self, token_ids: Sequence[int]) -> List[LabelVector]:
        """
        Run the model.

        Args:
            token_ids: Token ids, special tokens included

        Returns:
            One LabelVector per token id, same order

        Raises:
            InferenceError: if the runtime fails or the output shapes are wrong
        """
        if self.session is None:
            raise InferenceError("Inference session is closed")

        seq_len = len(token_ids)
        if seq_len == 0:
            return []

        input_ids = np.asarray(token_ids, dtype=np.int64).reshape(1, seq_len)
        feeds = {
            'input_ids': input_ids,
            'attention_mask': np.ones_like(input_ids),
            'token_type_ids': np.zeros_like(input_ids),
        }
        feeds = {name: value for name, value in feeds.items() if name in self.input_names}

        try:
            outputs = self.session.run(None, feeds)
        except Exception as e:
            raise InferenceError(f"Inference failed: {e}") from e

        if len(outputs) < len(HEAD_NAMES):
            raise InferenceError(f"Model returned {len(outputs)} outputs, expected {len(HEAD_NAMES)}")

        heads = []
        for head, output, width in zip(HEAD_NAMES, outputs, self.vocabulary.widths):
            logits = np.asarray(output)
            if logits.shape != (1, seq_len, width):
                raise InferenceError(
                    f"Model {head} output has shape {logits.shape}, expected {(1, seq_len, width)}"
                )
            heads.append(logits[0])

        return list(self.vocabulary.label_vectors(*heads))

    def close(self):
        self.session = None
