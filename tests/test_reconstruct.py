"""Tests for the text reconstructor."""

import pytest

from phonikud_onnx.constants import A_PATAH, DAGESH
from phonikud_onnx.errors import AlignmentInconsistency
from phonikud_onnx.normalize import extract_source_chars
from phonikud_onnx.reconstruct import reconstruct_text


def test_marks_follow_their_letter():
    chars = extract_source_chars('בת, 1')
    marks = [(DAGESH, A_PATAH), (), (), (), ()]
    assert reconstruct_text(chars, marks) == 'ב' + DAGESH + A_PATAH + 'ת, 1'


def test_no_marks_is_identity():
    text = 'Hello, עולם!\n'
    chars = extract_source_chars(text)
    assert reconstruct_text(chars, [()] * len(chars)) == text


def test_mismatched_lengths_raise():
    with pytest.raises(AlignmentInconsistency):
        reconstruct_text(extract_source_chars('אב'), [()])


def test_marks_on_non_letter_raise():
    with pytest.raises(AlignmentInconsistency):
        reconstruct_text(extract_source_chars('a'), [(A_PATAH,)])
