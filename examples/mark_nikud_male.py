"""
Mark matres lectionis (alef, vav, yod read as vowels) with the masora circle.

Run with:
    wget https://huggingface.co/thewh1teagle/phonikud-onnx/resolve/main/phonikud-1.0.int8.onnx -O phonikud.onnx
    wget https://huggingface.co/dicta-il/dictabert-large-char-menaked/raw/main/tokenizer.json -O tokenizer.json
    python examples/mark_nikud_male.py
"""

from phonikud_onnx import Phonikud
from phonikud_onnx.constants import MASORA_CIRCLE

with Phonikud('phonikud.onnx', 'tokenizer.json') as model:
    text = "הדייג נצמד לדופן הסירה בזמן הסערה."
    vocalized = model.add_diacritics(text, mark_matres_lectionis=MASORA_CIRCLE)

    print(f"Input:  {text}")
    print(f"Output: {vocalized}")
