"""Report how likely each file is to be a binary STL, optionally importing it.

Usage::

    python scripts/stl_info.py part.stl other.bin
    python scripts/stl_info.py --load part.stl        # also count faces
    python scripts/stl_info.py --load --verbose part.stl
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stlimport import estimate, import_stl_binary
from stlimport.logging_config import setup_logging


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("paths", nargs="+", help="files to inspect")
    ap.add_argument("--load", action="store_true",
                    help="import each file and report its face count")
    ap.add_argument("--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    status = 0
    for path in args.paths:
        try:
            probability = estimate(path)
        except OSError as exc:
            print(f"{path}: cannot read ({exc})", file=sys.stderr)
            status = 1
            continue
        line = f"{path}: binary STL probability {probability:.6g}"
        if args.load:
            model = import_stl_binary(path)
            line += f", {model.num_faces} faces"
        print(line)
    return status


if __name__ == "__main__":
    sys.exit(main())
