#!/usr/bin/env python3
"""
export_games.py

Write the games of a PGN collection as separate files, game_<N>.pgn, one per record.

- N is the 1-based position in the (outcome-filtered) list, so it matches "Game N" in browse_games.py,
  also when only one page is exported.
- Content is written unmodified (the trimmed record text), via a .tmp file renamed over the target.
- Batch exports are staggered by --delay seconds between files.

Usage:
  python export_games.py collection.pgn --filter draws --out-dir games/
  python export_games.py collection.pgn --page 3 --delay 0
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

import browse_games as bg
import pgn_collection as pc


EXPORT_DELAY_SECONDS = 0.1
DEFAULT_OUT_DIR = Path("games")


def export_filename(position: int) -> str:
    return f"game_{position + 1}.pgn"


def write_game(out_dir: Path, content: str, position: int) -> Path:
    out_path = out_dir / export_filename(position)
    tmp = out_path.with_suffix(out_path.suffix + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    tmp.replace(out_path)
    return out_path


def export_games(
    records: Sequence[pc.GameRecord],
    out_dir: Path,
    start: int = 0,
    delay: float = EXPORT_DELAY_SECONDS,
) -> List[Path]:
    """Write each record to out_dir; record i gets position start + i."""
    if delay < 0:
        raise ValueError("delay must be >= 0.")
    out_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for offset, record in enumerate(records):
        if offset and delay:
            time.sleep(delay)
        path = write_game(out_dir, record.content, start + offset)
        written.append(path)
        print(f"export: wrote={path}", file=sys.stderr, flush=True)
    return written


# ----------------------------
# CLI
# ----------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Export each game of a PGN collection to its own .pgn file.")
    ap.add_argument("pgn", help="Input PGN collection (.pgn, .pgn.zst, or '-' for stdin).")
    ap.add_argument(
        "--filter",
        default="all",
        choices=sorted(bg.OUTCOME_FILTERS),
        help="Outcome filter: wins=1-0, losses=0-1, draws=1/2-1/2.",
    )
    ap.add_argument("--page", type=int, default=None, help="Export only this 1-based page (default: all games).")
    ap.add_argument("--page-size", type=int, default=bg.PAGE_SIZE, help="Games per page when --page is set.")
    ap.add_argument("--out-dir", type=Path, default=DEFAULT_OUT_DIR, help="Directory for game_<N>.pgn files.")
    ap.add_argument(
        "--delay",
        type=float,
        default=EXPORT_DELAY_SECONDS,
        help="Seconds to wait between two files; 0 disables.",
    )
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        records = pc.load_collection(args.pgn)
    except FileNotFoundError:
        print(f"Error: File '{args.pgn}' not found.", file=sys.stderr)
        return 2

    try:
        filtered = bg.filter_by_outcome(records, args.filter)
        start = 0
        if args.page is not None:
            start, filtered = bg.page_window(filtered, args.page, args.page_size)

        if not filtered:
            print(f"No games to export (filter={args.filter} page={args.page}).", file=sys.stderr)
            return 0

        written = export_games(filtered, args.out_dir, start=start, delay=args.delay)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"done exported={len(written)} out={args.out_dir}", file=sys.stderr, flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
