#!/usr/bin/env python3
"""
Print a short summary of one or more xvi files:
station/shot/sketchline counts, sketch colors, bounds and grid hints.
"""

import argparse
import logging
import sys
from collections import Counter

from xvi import XviError, parse_file


def summarize(path):
    """Parse one file and print what it contains. Returns True on success."""
    print(f"\n{'=' * 60}")
    print(path)
    print('=' * 60)

    hints = []
    try:
        doc = parse_file(path, on_grid=hints.append)
    except (OSError, UnicodeDecodeError) as e:
        print(f"cannot read file: {e}")
        return False
    except XviError as e:
        print(f"parse error: {e}")
        return False

    print(f"Stations:    {len(doc.stations)}")
    print(f"Shots:       {len(doc.shots)}")
    print(f"Sketchlines: {len(doc.sketchlines)}")

    colors = Counter(line.color for line in doc.sketchlines)
    for color, n in sorted(colors.items()):
        print(f"  {color:12}: {n:4} lines")

    if doc.bounds is None:
        print("Bounds:      (no geometry)")
    else:
        b = doc.bounds
        print(f"Bounds:      ({b.min_x}, {b.min_y}) - ({b.max_x}, {b.max_y})"
              f"  [{b.width:.2f} x {b.height:.2f}]")

    for hint in hints:
        print(f"Grid hint:   {hint}")
    return True


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("paths", nargs="+", help="xvi files to read")
    ap.add_argument("-v", "--verbose", action="store_true", help="log decoding details")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ok = [summarize(p) for p in args.paths]
    return 0 if all(ok) else 1


if __name__ == '__main__':
    sys.exit(main())
