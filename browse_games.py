#!/usr/bin/env python3
"""
browse_games.py

List the games of a PGN collection (parsed by pgn_collection.py), newest first,
filtered by outcome and paginated.

- Filters compare the Result tag against a fixed token ("wins" == "1-0", etc.); "all" keeps everything.
- Pages are 1-based and clamped to [1, total_pages], like Previous/Next buttons.
- "Game N" numbering is the position in the filtered list, the same number export_games.py uses.

Usage:
  python browse_games.py collection.pgn --filter wins --page 2 --players
"""

from __future__ import annotations

import argparse
import io
import math
import sys
from typing import Dict, List, Optional, Sequence, Tuple

import chess.pgn

import pgn_collection as pc


PAGE_SIZE = 6

OUTCOME_FILTERS: Dict[str, Optional[str]] = {
    "all": None,
    "wins": "1-0",
    "losses": "0-1",
    "draws": "1/2-1/2",
}


def filter_by_outcome(records: Sequence[pc.GameRecord], name: str) -> Tuple[pc.GameRecord, ...]:
    if name not in OUTCOME_FILTERS:
        raise ValueError(f"Unknown filter {name!r} (expected one of {', '.join(OUTCOME_FILTERS)})")
    token = OUTCOME_FILTERS[name]
    if token is None:
        return tuple(records)
    return tuple(r for r in records if r.result == token)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError("page size must be >= 1.")
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def page_window(
    records: Sequence[pc.GameRecord], page: int, page_size: int = PAGE_SIZE
) -> Tuple[int, Tuple[pc.GameRecord, ...]]:
    """Return (start_index, records_on_page) for a 1-based page.

    start_index is the filtered-list position of the first record on the page.
    A page past the end yields an empty window.
    """
    if page < 1:
        raise ValueError("page must be >= 1.")
    if page_size < 1:
        raise ValueError("page size must be >= 1.")
    start = (page - 1) * page_size
    return start, tuple(records[start:start + page_size])


def game_label(position: int) -> str:
    return f"Game {position + 1}"


def read_players(content: str) -> Tuple[str, str]:
    # python-chess tolerates junk here; a record it cannot read just shows "?".
    headers = chess.pgn.read_headers(io.StringIO(content))
    if headers is None:
        return "?", "?"
    return headers.get("White", "?") or "?", headers.get("Black", "?") or "?"


def describe_record(record: pc.GameRecord, position: int, players: bool = False) -> str:
    line = f"{game_label(position)} - Date: {record.date} - Result: {record.result}"
    if players:
        white, black = read_players(record.content)
        line += f" - {white} vs {black}"
    return line


def print_page(
    records: Sequence[pc.GameRecord],
    page: int,
    page_size: int = PAGE_SIZE,
    players: bool = False,
) -> None:
    pages = total_pages(len(records), page_size)
    page = clamp_page(page, pages)
    start, window = page_window(records, page, page_size)

    print(f"{len(records)} games parsed")
    for offset, record in enumerate(window):
        print(describe_record(record, start + offset, players=players))
    if pages > 1:
        print(f"Page {page} of {pages}")


# ----------------------------
# CLI
# ----------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="List games of a PGN collection, newest first, filtered by outcome and paginated."
    )
    ap.add_argument("pgn", help="Input PGN collection (.pgn, .pgn.zst, or '-' for stdin).")
    ap.add_argument(
        "--filter",
        default="all",
        choices=sorted(OUTCOME_FILTERS),
        help="Outcome filter: wins=1-0, losses=0-1, draws=1/2-1/2.",
    )
    ap.add_argument("--page", type=int, default=1, help="1-based page to show (clamped to the last page).")
    ap.add_argument("--page-size", type=int, default=PAGE_SIZE, help="Games per page.")
    ap.add_argument("--players", action="store_true", help="Also show White and Black player names.")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        records = pc.load_collection(args.pgn)
    except FileNotFoundError:
        print(f"Error: File '{args.pgn}' not found.", file=sys.stderr)
        return 2

    try:
        filtered = filter_by_outcome(records, args.filter)
        if not filtered:
            print(f"No games found (filter={args.filter}).", file=sys.stderr)
            return 0
        print_page(filtered, args.page, page_size=args.page_size, players=args.players)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
