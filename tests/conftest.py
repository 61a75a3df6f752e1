"""Shared stubs: a character-level tokenizer and a scripted ONNX session."""

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import pytest

from phonikud_onnx.inference import InferenceAdapter
from phonikud_onnx.labels import PHONIKUD_VOCABULARY, NiqqudClass, PhoneticClass
from phonikud_onnx.pipeline import Phonikud
from phonikud_onnx.tokenizer import TokenizerAdapter

CLS_ID = 2
SEP_ID = 3


class CharTokenizer:
    """Mimics a character-level fast tokenizer: one token per character, ids are code points."""

    def __init__(self, fail: Optional[Exception] = None):
        self.fail = fail
        self.calls = 0

    def __call__(self, text, add_special_tokens=True, return_offsets_mapping=False, **kwargs):
        self.calls += 1
        if self.fail is not None:
            raise self.fail
        input_ids = [ord(char) for char in text]
        offsets = [(i, i + 1) for i in range(len(text))]
        if add_special_tokens:
            input_ids = [CLS_ID] + input_ids + [SEP_ID]
            offsets = [(0, 0)] + offsets + [(0, 0)]
        return {'input_ids': input_ids, 'offset_mapping': offsets}


class ScriptedTokenizer:
    """Returns fixed ids and offsets regardless of the input."""

    def __init__(self, input_ids, offsets):
        self.input_ids = list(input_ids)
        self.offsets = list(offsets)

    def __call__(self, text, **kwargs):
        return {'input_ids': self.input_ids, 'offset_mapping': self.offsets}


@dataclass
class Label:
    niqqud: NiqqudClass = NiqqudClass.NONE
    dagesh: bool = False
    sin: bool = False
    phonetics: Tuple[PhoneticClass, ...] = ()


def nikud_index(niqqud: NiqqudClass, dagesh: bool = False) -> int:
    return PHONIKUD_VOCABULARY.nikud_classes.index((niqqud, dagesh))


class StubSession:
    """
    Stands in for ``onnxruntime.InferenceSession``.

    Labels are looked up by token id, so with ``CharTokenizer`` they can be
    keyed by character.
    """

    def __init__(
        self,
        labels: Optional[Dict[str, Label]] = None,
        default: Label = Label(),
        widths: Sequence[int] = PHONIKUD_VOCABULARY.widths,
        input_names: Sequence[str] = ('input_ids', 'attention_mask', 'token_type_ids'),
        fail: Optional[Exception] = None,
        bad_length: bool = False,
    ):
        self.labels = {ord(char): label for char, label in (labels or {}).items()}
        self.default = default
        self.widths = tuple(widths)
        self.input_names = tuple(input_names)
        self.fail = fail
        self.bad_length = bad_length
        self.feeds = []

    def get_inputs(self):
        return [SimpleNamespace(name=name) for name in self.input_names]

    def get_outputs(self):
        return [
            SimpleNamespace(name=name, shape=['batch', 'seq', width])
            for name, width in zip(('nikud', 'shin', 'additional'), self.widths)
        ]

    def run(self, output_names, feeds):
        self.feeds.append(feeds)
        if self.fail is not None:
            raise self.fail

        token_ids = feeds['input_ids'][0]
        seq_len = len(token_ids) + (1 if self.bad_length else 0)
        nikud = np.zeros((1, seq_len, self.widths[0]), dtype=np.float32)
        shin = np.zeros((1, seq_len, self.widths[1]), dtype=np.float32)
        additional = np.full((1, seq_len, self.widths[2]), -10.0, dtype=np.float32)

        channels = PHONIKUD_VOCABULARY.phonetic_channels
        for position, token_id in enumerate(token_ids):
            label = self.labels.get(int(token_id), self.default)
            nikud[0, position, nikud_index(label.niqqud, label.dagesh)] = 10.0
            shin[0, position, 1 if label.sin else 0] = 10.0
            for phonetic in label.phonetics:
                additional[0, position, channels.index(phonetic)] = 10.0
        return [nikud, shin, additional]


@pytest.fixture
def make_phonikud():
    """Factory for a Phonikud built on stubs."""

    def _make(labels=None, default=Label(), tokenizer=None, session=None, **options):
        tokenizer = TokenizerAdapter(tokenizer or CharTokenizer())
        session = session or StubSession(labels, default=default)
        return Phonikud.from_components(tokenizer, InferenceAdapter(session), **options)

    return _make
