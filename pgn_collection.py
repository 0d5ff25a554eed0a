#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Split a concatenated PGN collection into individual game records, newest first.
#
# Key conventions (explicit):
# - A record starts at "[Event" and runs until the next "[Event" that follows a blank line.
# - Records missing "[Event", "[Result" or an outcome token are dropped, never reported as errors.
# - The date comes from the SourceDate tag only; absent -> DEFAULT_DATE.
# - Dates that do not parse sort as UNKNOWN_DATE_SORT_KEY (earliest), after DEFAULT_DATE.
#
# Nothing in the split/normalize path raises on malformed input; the worst case is an empty tuple.

from __future__ import annotations

import io
import re
import sys
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

import zstandard as zstd


# ----------------------------
# Constants
# ----------------------------

EVENT_MARKER = "[Event"
RESULT_MARKER = "[Result"
OUTCOME_TOKENS: Tuple[str, ...] = ("1-0", "0-1", "1/2-1/2")

DEFAULT_DATE = "1900.01.01"
UNKNOWN_DATE_SORT_KEY = date.min

SOURCE_DATE_RE = re.compile(r'\[SourceDate "([^"]+)"')
RESULT_RE = re.compile(r'\[Result "([^"]+)"')
DATE_RE = re.compile(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$")


@dataclass(frozen=True)
class GameRecord:
    content: str
    date: str
    sort_key: Optional[date]
    result: Optional[str]


# ----------------------------
# Splitter
# ----------------------------

def _blank_line_start(text: str, pos: int) -> Optional[int]:
    """Return the index of the newline that opens a blank line ending right before pos.

    None when text[:pos] does not end with "<newline><whitespace-only line><newline>".
    """
    end = pos - 1
    if end < 0 or text[end] != "\n":
        return None
    start = text.rfind("\n", 0, end)
    if start < 0:
        return None
    if text[start + 1:end].strip():
        return None
    return start


def split_into_candidates(text: str) -> List[str]:
    """Cut text into candidate records, one per "[Event" that begins a new game."""
    if not text:
        return []

    begin = text.find(EVENT_MARKER)
    if begin < 0:
        return []

    candidates: List[str] = []
    pos = text.find(EVENT_MARKER, begin + 1)
    while pos >= 0:
        cut = _blank_line_start(text, pos)
        if cut is not None:
            candidates.append(text[begin:cut])
            begin = pos
        pos = text.find(EVENT_MARKER, pos + 1)

    candidates.append(text[begin:])
    return candidates


def is_valid_candidate(candidate: str) -> bool:
    if EVENT_MARKER not in candidate or RESULT_MARKER not in candidate:
        return False
    return any(tok in candidate for tok in OUTCOME_TOKENS)


# ----------------------------
# Normalizer
# ----------------------------

def parse_date_string(value: str) -> Optional[date]:
    """Parse a dot-separated PGN date ("2022.01.31", "2022.01", "2022").

    Returns None for placeholders ("2022.??.??") and impossible dates.
    """
    m = DATE_RE.match((value or "").replace(".", "-").strip())
    if not m:
        return None
    year = int(m.group(1))
    month = int(m.group(2) or 1)
    day = int(m.group(3) or 1)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(1) if m else None


def build_record(candidate: str) -> GameRecord:
    record_date = _first_group(SOURCE_DATE_RE, candidate) or DEFAULT_DATE
    return GameRecord(
        content=candidate.strip(),
        date=record_date,
        sort_key=parse_date_string(record_date),
        result=_first_group(RESULT_RE, candidate),
    )


def _ordering_key(record: GameRecord) -> date:
    return record.sort_key or UNKNOWN_DATE_SORT_KEY


def parse_records(candidates: Iterable[str]) -> Tuple[GameRecord, ...]:
    """Validate candidates, extract metadata and order newest first.

    sorted() is stable, so records with equal dates keep their source order.
    """
    records = [build_record(c) for c in candidates if is_valid_candidate(c)]
    return tuple(sorted(records, key=_ordering_key, reverse=True))


def import_collection(text: Optional[str]) -> Tuple[GameRecord, ...]:
    return parse_records(split_into_candidates(text or ""))


# ----------------------------
# Input
# ----------------------------

def read_collection_text(path: str) -> str:
    """Read a whole PGN collection: '-' for stdin, '*.zst' decompressed on the fly."""
    if path == "-":
        text = sys.stdin.read()
    elif path.endswith(".zst"):
        with open(path, "rb") as fh:
            dctx = zstd.ZstdDecompressor()
            with dctx.stream_reader(fh) as reader:
                text_stream = io.TextIOWrapper(reader, encoding="utf-8", errors="replace")
                text = text_stream.read()
    else:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            text = fh.read()

    print(f"read: path={path} chars={len(text)}", file=sys.stderr, flush=True)
    return text


def load_collection(path: str) -> Tuple[GameRecord, ...]:
    """Read path and import it, logging how many candidates survived validation."""
    text = read_collection_text(path)
    # import_collection() inlined: the candidate list is needed for the dropped count.
    candidates = split_into_candidates(text)
    records = parse_records(candidates)
    print(
        f"parsed: candidates={len(candidates)} games={len(records)} "
        f"dropped={len(candidates) - len(records)}",
        file=sys.stderr,
        flush=True,
    )
    return records
