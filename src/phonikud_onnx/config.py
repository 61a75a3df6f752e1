"""
Configuration module for Hebrew diacritization.

Provides default configuration values and argparse setup for the command line.
"""

import argparse
import re

from .labels import parse_phonetic_groups

_CODE_POINT = re.compile(r"^[Uu]\+([0-9A-Fa-f]{4,6})$")


def parse_mark(text):
    """Accept a mark either as the literal character or as U+XXXX notation."""
    if not text:
        return None
    match = _CODE_POINT.match(text)
    if match:
        return chr(int(match.group(1), 16))
    return text


class Config:
    """Diacritization configuration with defaults."""

    # Artifacts
    model_path: str = "phonikud.onnx"
    tokenizer_path: str = "tokenizer.json"

    # Output
    mode: str = "male"
    mark_matres_lectionis: str = None  # e.g. "\u05af"

    # Decoding
    point_threshold: float = 0.5
    phonetic_threshold: float = 0.5
    exclusive_phonetic_groups: tuple = ()
    strip_existing_marks: bool = True

    # Runtime
    intra_threads: int = 4
    providers: tuple = None  # None for CPU

    # Logging
    log_level: str = "WARNING"

    def __init__(self, **kwargs):
        """Initialize config with optional overrides."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise TypeError(f"Unknown config option: {key}")

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="phonikud-onnx",
            description="Add nikud and phonetic marks to Hebrew text",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )

        # Artifact arguments
        parser.add_argument("--model", type=str, default=cls.model_path,
                            help="Path to the ONNX model")
        parser.add_argument("--tokenizer", type=str, default=cls.tokenizer_path,
                            help="Path to tokenizer.json")

        # Input arguments
        parser.add_argument("--text", type=str, default=None,
                            help="Text to add nikud to")
        parser.add_argument("--file", type=str, default=None,
                            help="File containing text to add nikud to, one text per line")

        # Output arguments
        parser.add_argument("--mode", type=str, default=cls.mode,
                            choices=["male", "haser"],
                            help="Vocalization mode")
        parser.add_argument("--mark-matres", type=str, default=cls.mark_matres_lectionis,
                            help="Mark to place on matres lectionis, as the character or U+XXXX (e.g. U+05AF)")
        parser.add_argument("--keep-existing-marks", action="store_true",
                            help="Do not strip nikud already present in the input")

        # Decoding arguments
        parser.add_argument("--point-threshold", type=float, default=cls.point_threshold,
                            help="Probability above which dagesh and shin/sin dots are placed")
        parser.add_argument("--phonetic-threshold", type=float, default=cls.phonetic_threshold,
                            help="Probability above which phonetic marks are placed")
        parser.add_argument("--exclusive-phonetic", type=str, default=None,
                            help="Mutually exclusive phonetic groups, e.g. 'stress+shva_na'")

        # Runtime arguments
        parser.add_argument("--threads", type=int, default=cls.intra_threads,
                            help="Intra-op threads for onnxruntime")
        parser.add_argument("--provider", action="append", default=None,
                            help="onnxruntime execution provider (repeatable)")
        parser.add_argument("--log-level", type=str, default=cls.log_level,
                            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                            help="Logging level")
        return parser

    @classmethod
    def from_args(cls, argv=None):
        """Parse arguments and create config. Returns (config, args)."""
        parser = cls.build_parser()
        args = parser.parse_args(argv)

        try:
            groups = parse_phonetic_groups(args.exclusive_phonetic)
        except ValueError as e:
            parser.error(f"--exclusive-phonetic: {e}")
        try:
            mark_matres = parse_mark(args.mark_matres)
        except (ValueError, OverflowError) as e:
            parser.error(f"--mark-matres: {e}")

        # Create config from args
        config = cls(
            model_path=args.model,
            tokenizer_path=args.tokenizer,
            mode=args.mode,
            mark_matres_lectionis=mark_matres,
            point_threshold=args.point_threshold,
            phonetic_threshold=args.phonetic_threshold,
            exclusive_phonetic_groups=groups,
            strip_existing_marks=not args.keep_existing_marks,
            intra_threads=args.threads,
            providers=tuple(args.provider) if args.provider else None,
            log_level=args.log_level,
        )

        return config, args

    def __repr__(self):
        """String representation of config."""
        lines = ["Configuration:"]
        for key in sorted(self._fields()):
            lines.append(f"  {key}: {getattr(self, key)}")
        return "\n".join(lines)

    @classmethod
    def _fields(cls):
        return [
            key for key, value in vars(Config).items()
            if not key.startswith("_") and not callable(value) and not isinstance(value, classmethod)
        ]
