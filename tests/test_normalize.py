"""Tests for input normalization."""

from phonikud_onnx.normalize import (
    extract_source_chars,
    has_hebrew_letters,
    is_hebrew_letter,
    is_hebrew_mark,
    remove_nikud,
)


def test_is_hebrew_letter():
    assert is_hebrew_letter('א')
    assert is_hebrew_letter('ת')
    assert is_hebrew_letter('ך')  # final kaf
    assert not is_hebrew_letter('a')
    assert not is_hebrew_letter(' ')
    assert not is_hebrew_letter('\u05b7')  # patah
    assert not is_hebrew_letter('\ufb2a')  # shin with shin dot presentation form


def test_hebrew_punctuation_is_not_a_mark():
    assert is_hebrew_mark('\u05b7')
    assert is_hebrew_mark('\u05bc')
    assert not is_hebrew_mark('\u05be')  # maqaf
    assert not is_hebrew_mark('\u05c3')  # sof pasuq


def test_remove_nikud_strips_points_and_prefix_marks():
    vocalized = 'ש\u05b8\u05c1\u05ab|לו\u05b9ם'
    assert remove_nikud(vocalized) == 'שלום'


def test_remove_nikud_keeps_unrelated_pipes_and_punctuation():
    assert remove_nikud('a|b') == 'a|b'
    assert remove_nikud('| שלום') == '| שלום'
    assert remove_nikud('בית\u05beספר') == 'בית\u05beספר'


def test_has_hebrew_letters():
    assert has_hebrew_letters('hello שלום')
    assert not has_hebrew_letters('hello, world 123')
    assert not has_hebrew_letters('')


def test_extract_source_chars_byte_offsets():
    chars = extract_source_chars('aש b')
    assert [c.char for c in chars] == ['a', 'ש', ' ', 'b']
    assert [c.byte_offset for c in chars] == [0, 1, 3, 4]
    assert [c.is_hebrew_letter for c in chars] == [False, True, False, False]
    assert [c.index for c in chars] == [0, 1, 2, 3]
