import sys
from pathlib import Path
from typing import List

import pytest

# Ensure project root is in sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import browse_games as bg
import pgn_collection as pc

SAMPLE_PGN = """\
[Event "Casual"]
[White "Alice"]
[Black "Bob"]
[SourceDate "2023.04.01"]
[Result "1-0"]

1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7# 1-0

[Event "Casual"]
[White "Carol"]
[Black "Alice"]
[SourceDate "2023.05.01"]
[Result "0-1"]

1. f3 e5 2. g4 Qh4# 0-1

[Event "Casual"]
[White "Bob"]
[Black "Carol"]
[SourceDate "2022.12.24"]
[Result "1/2-1/2"]

1. d4 d5 1/2-1/2

[Event "Casual"]
[White "Dave"]
[Black "Erin"]
[Result "1-0"]

1. c4 1-0
"""


def make_records(n: int, result: str = "1-0") -> List[pc.GameRecord]:
    return [
        pc.GameRecord(content=f'[Event "g{i}"]', date=pc.DEFAULT_DATE, sort_key=None, result=result)
        for i in range(n)
    ]


@pytest.fixture
def records():
    return pc.import_collection(SAMPLE_PGN)


@pytest.fixture
def pgn_file(tmp_path):
    p = tmp_path / "collection.pgn"
    p.write_text(SAMPLE_PGN, encoding="utf-8")
    return p


def test_filter_by_outcome(records):
    assert len(bg.filter_by_outcome(records, "all")) == 4
    wins = bg.filter_by_outcome(records, "wins")
    assert [r.date for r in wins] == ["2023.04.01", "1900.01.01"]
    assert [r.result for r in bg.filter_by_outcome(records, "losses")] == ["0-1"]
    assert [r.result for r in bg.filter_by_outcome(records, "draws")] == ["1/2-1/2"]


def test_filter_by_outcome_unknown_name(records):
    with pytest.raises(ValueError, match="Unknown filter"):
        bg.filter_by_outcome(records, "stalemates")


def test_filter_skips_records_without_result():
    rec = pc.GameRecord(content='[Event "x"]', date=pc.DEFAULT_DATE, sort_key=None, result=None)
    assert bg.filter_by_outcome([rec], "wins") == ()
    assert bg.filter_by_outcome([rec], "all") == (rec,)


def test_total_pages():
    assert bg.total_pages(0) == 0
    assert bg.total_pages(6) == 1
    assert bg.total_pages(7) == 2
    assert bg.total_pages(7, page_size=3) == 3
    with pytest.raises(ValueError):
        bg.total_pages(3, page_size=0)


def test_clamp_page():
    assert bg.clamp_page(0, 3) == 1
    assert bg.clamp_page(2, 3) == 2
    assert bg.clamp_page(9, 3) == 3
    assert bg.clamp_page(4, 0) == 1


def test_page_window():
    recs = make_records(8)
    start, window = bg.page_window(recs, 2)
    assert start == 6
    assert window == tuple(recs[6:8])

    start, window = bg.page_window(recs, 5)
    assert start == 24
    assert window == ()

    with pytest.raises(ValueError, match="page must be >= 1"):
        bg.page_window(recs, 0)


def test_describe_record_with_players(records):
    line = bg.describe_record(records[0], 0, players=True)
    assert line == "Game 1 - Date: 2023.05.01 - Result: 0-1 - Carol vs Alice"
    assert bg.describe_record(records[0], 7) == "Game 8 - Date: 2023.05.01 - Result: 0-1"


def test_read_players_missing_tags():
    assert bg.read_players('[Event "x"]\n[Result "1-0"]\n\n1. e4 1-0') == ("?", "?")


def test_print_page_numbers_follow_filtered_position(capsys):
    recs = make_records(8)
    bg.print_page(recs, 2, page_size=3)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "8 games parsed"
    assert out[1].startswith("Game 4 - ")
    assert out[3].startswith("Game 6 - ")
    assert out[-1] == "Page 2 of 3"


def test_print_page_single_page_has_no_footer(capsys):
    bg.print_page(make_records(2), 1)
    out = capsys.readouterr().out
    assert "Page" not in out


def test_main_lists_wins(pgn_file, capsys):
    assert bg.main([str(pgn_file), "--filter", "wins", "--players"]) == 0
    out = capsys.readouterr().out
    assert "2 games parsed" in out
    assert "Game 1 - Date: 2023.04.01 - Result: 1-0 - Alice vs Bob" in out
    assert "Game 2 - Date: 1900.01.01 - Result: 1-0 - Dave vs Erin" in out


def test_main_clamps_page_past_end(pgn_file, capsys):
    assert bg.main([str(pgn_file), "--page", "9", "--page-size", "3"]) == 0
    out = capsys.readouterr().out
    assert "Game 4 - " in out
    assert "Page 2 of 2" in out


def test_main_missing_file(tmp_path, capsys):
    assert bg.main([str(tmp_path / "nope.pgn")]) == 2
    assert "not found" in capsys.readouterr().err


def test_main_bad_page_size(pgn_file, capsys):
    assert bg.main([str(pgn_file), "--page-size", "0"]) == 2
    assert "page size must be >= 1" in capsys.readouterr().err


def test_main_empty_collection(tmp_path, capsys):
    p = tmp_path / "empty.pgn"
    p.write_text("", encoding="utf-8")
    assert bg.main([str(p)]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "No games found" in captured.err
