"""Rating Aggregator — running average of the feedback scores an organizer receives.

The organizer's rating is maintained as an online incremental mean, so no
rating history is stored:

    new_count  = review_count + 1
    new_rating = (rating * review_count + score) / new_count

With ``review_count == 0`` the new rating is simply the score. Feedback is
write-once per request, so there is no removal or adjustment path.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from protean.exceptions import ValidationError

MIN_SCORE = 1
MAX_SCORE = 5


def validate_score(score) -> int:
    """Return the score if it is an integer star rating between 1 and 5."""
    if isinstance(score, bool) or not isinstance(score, int) or not (MIN_SCORE <= score <= MAX_SCORE):
        raise ValidationError({"rating": [f"Rating must be between {MIN_SCORE} and {MAX_SCORE}"]})
    return score


@dataclass(frozen=True)
class RatingSummary:
    """An organizer's rating and the number of feedback events behind it."""

    rating: float = 0.0
    review_count: int = 0

    def fold(self, score: int) -> "RatingSummary":
        """Return the summary after one more feedback score."""
        validate_score(score)
        new_count = self.review_count + 1
        if self.review_count == 0:
            return RatingSummary(rating=float(score), review_count=new_count)
        return RatingSummary(
            rating=(self.rating * self.review_count + score) / new_count,
            review_count=new_count,
        )


def fold_scores(scores: Iterable[int], start: RatingSummary | None = None) -> list[RatingSummary]:
    """Fold scores one by one, returning every intermediate summary."""
    summary = start or RatingSummary()
    history = []
    for score in scores:
        summary = summary.fold(score)
        history.append(summary)
    return history
