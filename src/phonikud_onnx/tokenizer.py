"""
Tokenizer adapter.

Wraps a HuggingFace fast tokenizer (loaded from a ``tokenizer.json``) and
returns TokenSpans anchored to character offsets of the input text.
"""

import logging
from pathlib import Path
from typing import List

from transformers import PreTrainedTokenizerFast

from .errors import LoadError, TokenizationError
from .types import TokenSpan

logger = logging.getLogger(__name__)


class TokenizerAdapter:
    """Turns raw text into TokenSpans."""

    def __init__(self, tokenizer):
        """
        Args:
            tokenizer: A fast tokenizer that supports ``return_offsets_mapping``
        """
        self.tokenizer = tokenizer

    @classmethod
    def from_file(cls, tokenizer_path: str) -> 'TokenizerAdapter':
        """
        Load a tokenizer description.

        Raises:
            LoadError: if the file is missing or cannot be parsed
        """
        path = Path(tokenizer_path)
        if not path.is_file():
            raise LoadError(f"Tokenizer file not found: {path}")

        logger.info(f"Loading tokenizer from {path}")
        try:
            tokenizer = PreTrainedTokenizerFast(tokenizer_file=str(path))
        except Exception as e:
            raise LoadError(f"Tokenizer load error: {e}") from e
        return cls(tokenizer)

    def tokenize(self, text: str) -> List[TokenSpan]:
        """
        Tokenize text, special tokens included.

        Args:
            text: Plain text

        Returns:
            TokenSpans in model input order. Special tokens have empty spans.

        Raises:
            TokenizationError: if the text is not valid Unicode or the tokenizer fails
        """
        if not text:
            return []

        try:
            text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise TokenizationError(f"Invalid text encoding: {e}") from e

        try:
            encoding = self.tokenizer(
                text,
                add_special_tokens=True,
                return_offsets_mapping=True,
                return_attention_mask=False,
                return_token_type_ids=False,
            )
        except Exception as e:
            raise TokenizationError(f"Tokenizer error: {e}") from e

        input_ids = encoding['input_ids']
        offsets = encoding['offset_mapping']
        if len(input_ids) != len(offsets):
            raise TokenizationError(
                f"Tokenizer returned {len(input_ids)} ids but {len(offsets)} offsets"
            )

        return [
            TokenSpan(position=position, start=int(start), end=int(end), token_id=int(token_id))
            for position, (token_id, (start, end)) in enumerate(zip(input_ids, offsets))
        ]

    def close(self):
        self.tokenizer = None
