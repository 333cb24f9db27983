"""Tests for the reviewer summary."""

from conftest import build_state, build_task
from minikanban.models import BoardState
from minikanban.services import ReviewService


class TestReviewSummary:
    def test_empty_board(self):
        summary = ReviewService().summary(BoardState.default())
        assert summary.average is None
        assert summary.scored == 0
        assert summary.pending_titles == []

    def test_average_rounded(self):
        state = build_state(
            build_task(id="a", rubric_score=7),
            build_task(id="b", rubric_score=8),
            build_task(id="c", rubric_score=8),
            build_task(id="d", title="Sin nota"),
        )
        summary = ReviewService().summary(state)
        assert summary.average == 7.7
        assert summary.scored == 3
        assert summary.unscored == 1
        assert summary.pending_titles == ["Sin nota"]

    def test_pending_titles_limited(self):
        tasks = [build_task(id=f"t{i}", title=f"Tarea {i}") for i in range(10)]
        summary = ReviewService().summary(build_state(*tasks))
        assert summary.unscored == 10
        assert len(summary.pending_titles) == ReviewService.PENDING_LIMIT
