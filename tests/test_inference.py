"""Tests for the inference adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from conftest import Label, StubSession
from phonikud_onnx.errors import InferenceError, LoadError
from phonikud_onnx.inference import InferenceAdapter
from phonikud_onnx.labels import NiqqudClass, PhoneticClass, PointClass


def test_one_label_vector_per_token():
    session = StubSession(labels={'ב': Label(NiqqudClass.PATAH, dagesh=True, phonetics=(PhoneticClass.STRESS,))})
    adapter = InferenceAdapter(session)

    vectors = adapter.infer([2, ord('ב'), ord('ג'), 3])

    assert len(vectors) == 4
    bet = vectors[1]
    assert max(bet.niqqud, key=bet.niqqud.get) is NiqqudClass.PATAH
    assert bet.points[PointClass.DAGESH] > 0.99
    assert bet.phonetics[PhoneticClass.STRESS] > 0.99
    assert bet.phonetics[PhoneticClass.SHVA_NA] < 0.01
    gimel = vectors[2]
    assert max(gimel.niqqud, key=gimel.niqqud.get) is NiqqudClass.NONE


def test_feeds_match_declared_inputs():
    session = StubSession(input_names=('input_ids', 'attention_mask'))
    InferenceAdapter(session).infer([2, 5, 3])

    [feeds] = session.feeds
    assert set(feeds) == {'input_ids', 'attention_mask'}
    assert feeds['input_ids'].dtype == np.int64
    assert feeds['input_ids'].shape == (1, 3)
    assert feeds['attention_mask'].tolist() == [[1, 1, 1]]


def test_empty_input_skips_the_model():
    session = StubSession()
    assert InferenceAdapter(session).infer([]) == []
    assert session.feeds == []


def test_runtime_error_is_wrapped():
    adapter = InferenceAdapter(StubSession(fail=RuntimeError("onnx exploded")))
    with pytest.raises(InferenceError, match="onnx exploded"):
        adapter.infer([2, 3])


def test_wrong_output_length_raises():
    adapter = InferenceAdapter(StubSession(bad_length=True))
    with pytest.raises(InferenceError, match="shape"):
        adapter.infer([2, 5, 3])


def test_vocabulary_drift_is_rejected_at_load():
    with pytest.raises(LoadError, match="nikud"):
        InferenceAdapter(StubSession(widths=(6, 2, 3)))


def test_missing_input_ids_is_rejected_at_load():
    with pytest.raises(LoadError):
        InferenceAdapter(StubSession(input_names=('tokens',)))


def test_closed_adapter():
    adapter = InferenceAdapter(StubSession())
    adapter.close()
    with pytest.raises(InferenceError):
        adapter.infer([2, 3])


def test_from_file_missing(tmp_path):
    with pytest.raises(LoadError):
        InferenceAdapter.from_file(str(tmp_path / 'missing.onnx'))


def test_from_file_corrupt(tmp_path):
    path = tmp_path / 'model.onnx'
    path.write_bytes(b'not a model')
    with pytest.raises(LoadError):
        InferenceAdapter.from_file(str(path))


def test_from_file_session_options(tmp_path):
    path = tmp_path / 'model.onnx'
    path.write_bytes(b'')
    with patch('phonikud_onnx.inference.ort.InferenceSession', return_value=StubSession()) as session_cls:
        adapter = InferenceAdapter.from_file(str(path), intra_threads=2)

    assert isinstance(adapter.session, StubSession)
    _, kwargs = session_cls.call_args
    assert kwargs['sess_options'].intra_op_num_threads == 2
    assert kwargs['providers'] == ['CPUExecutionProvider']


def test_session_shapes_may_be_dynamic():
    session = MagicMock()
    session.get_inputs.return_value = [SimpleNamespace(name='input_ids')]
    session.get_outputs.return_value = [SimpleNamespace(shape=['b', 's', None]) for _ in range(3)]
    adapter = InferenceAdapter(session)
    assert adapter.input_names == ['input_ids']
