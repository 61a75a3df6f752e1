"""
Hebrew Unicode constants for nikud and phonetic marks.
"""

# Vowel marks
SHVA = '\u05b0'
HATAF_SEGOL = '\u05b1'
HATAF_PATAH = '\u05b2'
HATAF_QAMATS = '\u05b3'
I_HIRIK = '\u05b4'  # i
E_TSERE = '\u05b5'  # e
SEGOL = '\u05b6'
A_PATAH = '\u05b7'  # a
QAMATS = '\u05b8'
O_HOLAM = '\u05b9'  # o
HOLAM_HASER = '\u05ba'
U_QUBUT = '\u05bb'  # u
QAMATS_QATAN = '\u05c7'

# Other marks
DAGESH = '\u05bc'
SHIN_DOT = '\u05c1'
S_SIN = '\u05c2'

# Phonetic marks
STRESS_HATAMA = '\u05ab'  # "ole" marks stress
GLOTTAL_STOP = '\u05c4'  # upper dot marks an audible glottal stop
VOCAL_SHVA = '\u05bd'  # "meteg" marks vocal shva
PREFIX = '|'

# Optional marker for matres lectionis, see examples/mark_nikud_male.py
MASORA_CIRCLE = '\u05af'

# Character sets
CAN_HAVE_SIN = 'ש'
MATRES_LETTERS = 'אוי'
LETTERS = 'אבגדהוזחטיכלמנסעפצקרשת' + 'םןףץ'
ALEF = 'א'
TAF = 'ת'
VAV = 'ו'
YOD = 'י'

# Combining Hebrew marks live in this block, mixed with a few punctuation signs
MARKS_START = '\u0591'
MARKS_END = '\u05c7'
