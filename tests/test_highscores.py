import random

from dashsave.highscores import HighscoreLedger
from dashsave.state import HighscoreEntry


def _scores(entries):
    return [(e.score, e.name) for e in entries]


def test_insert_between_existing_entries():
    entries = [HighscoreEntry("A", 100), HighscoreEntry("B", 80)]
    ledger = HighscoreLedger(entries)
    assert ledger.insert(90, "C") == 1
    assert _scores(entries) == [(100, "A"), (90, "C"), (80, "B")]


def test_rank_of_ties_places_new_entry_first():
    entries = [HighscoreEntry("A", 100), HighscoreEntry("B", 90), HighscoreEntry("C", 80)]
    ledger = HighscoreLedger(entries)
    assert ledger.rank_of(90) == 1
    assert ledger.rank_of(200) == 0
    assert ledger.rank_of(10) == 3

    ledger.insert(90, "D")
    assert _scores(entries) == [(100, "A"), (90, "D"), (90, "B"), (80, "C")]


def test_capped_at_ten():
    entries = []
    ledger = HighscoreLedger(entries)
    for score in range(0, 120, 10):
        ledger.insert(score, f"p{score}")
    assert len(ledger) == 10
    assert ledger[0].score == 110
    assert ledger[9].score == 20


def test_score_below_full_board_is_ignored():
    entries = [HighscoreEntry(f"p{i}", 100 - i) for i in range(10)]
    before = list(entries)
    ledger = HighscoreLedger(entries)
    assert ledger.insert(5, "late") is None
    assert entries == before


def test_duplicates_are_independent_entries():
    entries = []
    ledger = HighscoreLedger(entries)
    ledger.insert(50, "A")
    ledger.insert(50, "A")
    assert _scores(entries) == [(50, "A"), (50, "A")]


def test_random_inserts_keep_order_and_cap():
    rnd = random.Random(7)
    entries = []
    ledger = HighscoreLedger(entries)
    for i in range(300):
        ledger.insert(rnd.randint(0, 1000), f"p{i}")
        scores = [e.score for e in entries]
        assert scores == sorted(scores, reverse=True)
        assert len(entries) <= 10
