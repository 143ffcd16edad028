"""Command line entry point.

Usage:
    smev-transform canonicalize request.xml -o request.c14n.xml
    cat request.xml | smev-transform canonicalize
    smev-transform hash request.c14n.xml
    smev-transform hash --text "payload"
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import TransformSettings
from .hash import hash_bytes, hash_text, hash_to_string
from .transform import TransformationError, transform_bytes

logger = logging.getLogger(__name__)


def _read_input(path: Optional[str]) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _canonicalize(args, settings: TransformSettings) -> int:
    data = _read_input(args.input)
    result = transform_bytes(data, settings)

    if args.output:
        Path(args.output).write_bytes(result)
        logger.info("Wrote %d bytes to %s", len(result), args.output)
    else:
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
    return 0


def _hash(args, settings: TransformSettings) -> int:
    if args.text is not None:
        print(hash_text(args.text))
    else:
        print(hash_to_string(hash_bytes(_read_input(args.input))))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smev-transform",
        description="SMEV XML-signature canonicalizing transform",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(logging.getLevelNamesMapping()),
        help="Logging level (default: SMEV_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    canonical = subparsers.add_parser("canonicalize", help="Write the canonical form of an XML document")
    canonical.add_argument("input", nargs="?", help="XML file, '-' or omitted for stdin")
    canonical.add_argument("-o", "--output", help="Output file (default: stdout)")
    canonical.set_defaults(handler=_canonicalize)

    digest = subparsers.add_parser("hash", help="Print the hybrid hash of a file or string")
    digest.add_argument("input", nargs="?", help="File, '-' or omitted for stdin")
    digest.add_argument("--text", help="Hash this string instead of a file")
    digest.set_defaults(handler=_hash)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = TransformSettings.from_env()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args, settings)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except TransformationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
