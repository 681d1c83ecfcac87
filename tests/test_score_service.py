"""Tests for core/services/score_service.py: the aggregate score invariant."""

import pytest

from core.items import base_points_for_item, max_total_points


def _bonus(ledger, capture_id, points):
    ledger.append(capture_id, "jungle", "Jungle", 2.0, points, 1000)


class TestTotalScore:
    def test_empty_collection(self, scores):
        assert scores.total_score() == 0
        assert scores.points_entries() == []
        assert scores.leaderboard_score() == 0

    def test_base_points_counted_once_per_item(self, scores, insert_capture):
        insert_capture("llama")
        insert_capture("llama")
        insert_capture("condor")
        assert scores.total_score() == base_points_for_item("llama") + base_points_for_item("condor")

    def test_total_is_base_plus_live_bonuses(self, scores, ledger, captures, insert_capture):
        a = insert_capture("llama")
        b = insert_capture("llama")
        c = insert_capture("condor")
        _bonus(ledger, a, 5)
        _bonus(ledger, b, 7)
        _bonus(ledger, c, 30)
        expected = base_points_for_item("llama") + base_points_for_item("condor") + 42
        assert scores.total_score() == expected

        captures.delete_capture(c)
        assert scores.total_score() == base_points_for_item("llama") + 12

    def test_unknown_item_has_zero_base(self, scores, insert_capture):
        insert_capture("mystery")
        assert scores.total_score() == 0

    def test_leaderboard_score_matches_total(self, scores, ledger, insert_capture):
        _bonus(ledger, insert_capture("orchid"), 20)
        assert scores.leaderboard_score() == scores.total_score() == 40
        assert isinstance(scores.leaderboard_score(), int)


class TestBreakdown:
    def test_entries_sorted_by_points_then_title(self, scores, insert_capture):
        insert_capture("llama")
        insert_capture("terraces")
        insert_capture("condor")
        entries = scores.points_entries()
        assert [e.item_id for e in entries] == ["condor", "terraces", "llama"]
        assert [e.title for e in entries] == ["Andean Condor", "Inca Terraces", "Llama"]

    def test_entry_includes_bonus(self, scores, ledger, insert_capture):
        cid = insert_capture("llama")
        _bonus(ledger, cid, 10)
        (entry,) = scores.points_entries()
        assert entry.base_points == 10
        assert entry.bonus_points == 10
        assert entry.points == 20
        assert entry.capture_ids == [cid]

    def test_capture_breakdown(self, scores, ledger, insert_capture):
        cid = insert_capture("condor")
        _bonus(ledger, cid, 15)
        _bonus(ledger, cid, 5)
        assert scores.capture_breakdown(cid) == (30, 20, 50)
        assert scores.capture_breakdown(999) == (0, 0, 0)

    def test_progress_clamped(self, scores, ledger, insert_capture):
        assert scores.progress() == 0.0
        insert_capture("llama")
        assert scores.progress() == pytest.approx(10 / max_total_points())
        _bonus(ledger, insert_capture("condor"), 10_000)
        assert scores.progress() == 1.0
