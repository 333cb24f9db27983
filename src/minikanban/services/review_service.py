"""Rubric summary shown in elevated review mode."""

from dataclasses import dataclass, field

from ..models import BoardState


@dataclass
class ReviewSummary:
    """Aggregate of rubric scores across the board."""

    average: float | None = None  # None when nothing is scored
    scored: int = 0
    unscored: int = 0
    pending_titles: list[str] = field(default_factory=list)  # First unscored titles


class ReviewService:
    """Computes the reviewer summary."""

    PENDING_LIMIT = 6

    def summary(self, state: BoardState) -> ReviewSummary:
        """Average score (one decimal) and the tasks still to evaluate."""
        tasks = state.task_list()
        scores = [t.rubric_score for t in tasks if t.rubric_score is not None]
        unscored = [t for t in tasks if t.rubric_score is None]

        average = round(sum(scores) / len(scores), 1) if scores else None
        return ReviewSummary(
            average=average,
            scored=len(scores),
            unscored=len(unscored),
            pending_titles=[t.title for t in unscored[: self.PENDING_LIMIT]],
        )
