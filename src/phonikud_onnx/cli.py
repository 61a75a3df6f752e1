"""Command line entry point: add nikud to text, a file, or interactive input."""

import logging
import sys

from tqdm import tqdm

from .config import Config
from .errors import LoadError, PipelineError
from .pipeline import Phonikud

logger = logging.getLogger(__name__)


def read_texts(args):
    """Collect input texts from --text, --file, or an interactive prompt."""
    if args.text:
        return [args.text]
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip()]

    # Interactive mode
    print("Interactive mode. Enter Hebrew text (Ctrl+C or Ctrl+D to exit):")
    texts = []
    try:
        while True:
            text = input("> ")
            if text.strip():
                texts.append(text.strip())
    except (KeyboardInterrupt, EOFError):
        print("\nExiting...")
    return texts


def main(argv=None) -> int:
    """Main inference function."""
    config, args = Config.from_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug(repr(config))

    try:
        texts = read_texts(args)
    except OSError as e:
        print(f"error: cannot read input: {e}", file=sys.stderr)
        return 1

    try:
        phonikud = Phonikud.from_config(config)
    except LoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    with phonikud:
        try:
            results = [
                phonikud.add_diacritics(text, config.mode, config.mark_matres_lectionis)
                for text in tqdm(texts, desc="Adding nikud", disable=len(texts) < 2)
            ]
        except PipelineError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    for text, nikud_text in zip(texts, results):
        if args.text or args.file:
            print(nikud_text)
        else:
            print(f"Input:  {text}")
            print(f"Output: {nikud_text}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
