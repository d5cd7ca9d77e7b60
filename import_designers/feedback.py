"""
Recommendation feedback analytics.

The analytics endpoint aggregates the feedback recruiters leave on AI
recommendations. Every key is required, so a malformed body is rejected at the
client boundary.
"""

import math

from pydantic import BaseModel, ConfigDict, Field

FEEDBACK_TYPE_LABELS: dict[str, str] = {
    "good_match": "Good Matches",
    "irrelevant_experience": "Irrelevant Experience",
    "under_qualified": "Under-qualified",
    "over_qualified": "Over-qualified",
    "location_mismatch": "Location Mismatch",
}

LEARNING_THRESHOLD = 10
LOW_SUCCESS_RATE = 60


class FeedbackByType(BaseModel):
    irrelevant_experience: int
    under_qualified: int
    over_qualified: int
    location_mismatch: int
    good_match: int


class FeedbackTrend(BaseModel):
    type: str
    total: int
    recent: int

    @property
    def recent_share(self) -> int:
        """Percentage of this type's feedback that is recent"""
        return percentage(self.recent, self.total)

    @property
    def is_increasing(self) -> bool:
        return self.recent > self.total - self.recent


class FeedbackAnalytics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_feedback: int = Field(alias="totalFeedback")
    feedback_by_type: FeedbackByType = Field(alias="feedbackByType")
    average_match_score: float = Field(alias="averageMatchScore")
    average_rating: float = Field(alias="averageRating")
    common_concerns: list[str] = Field(alias="commonConcerns")
    recent_trends: list[FeedbackTrend] = Field(alias="recentTrends")


def percentage(count: int, total: int) -> int:
    # halves round up
    return math.floor(count / total * 100 + 0.5) if total > 0 else 0


def success_rate(analytics: FeedbackAnalytics) -> int:
    """Good matches as a whole percentage of all feedback"""
    return percentage(analytics.feedback_by_type.good_match, analytics.total_feedback)


def type_breakdown(analytics: FeedbackAnalytics) -> list[tuple[str, int, int]]:
    """(label, count, percentage) per feedback type, in server key order"""
    counts = analytics.feedback_by_type.model_dump()
    return [
        (FEEDBACK_TYPE_LABELS.get(key, key), count, percentage(count, analytics.total_feedback))
        for key, count in counts.items()
    ]


def insights(analytics: FeedbackAnalytics) -> list[str]:
    notes = []
    by_type = analytics.feedback_by_type

    if success_rate(analytics) < LOW_SUCCESS_RATE:
        notes.append(
            "Low success rate detected. Consider adjusting matching criteria or gathering "
            "more specific feedback to improve AI recommendations."
        )
    if by_type.location_mismatch > by_type.good_match:
        notes.append(
            "Location matching issues. High location mismatch feedback suggests the AI "
            "needs better location preference understanding."
        )
    if analytics.total_feedback >= LEARNING_THRESHOLD:
        notes.append(
            f"With {analytics.total_feedback} feedback entries, the enhanced recommendation "
            "system is now learning from your preferences."
        )

    return notes


def format_feedback(analytics: FeedbackAnalytics) -> list[str]:
    """Render the analytics dashboard as text lines"""
    rating = (
        f"{analytics.average_rating:.1f}" if analytics.average_rating > 0 else "N/A"
    )
    lines = [
        f"Total feedback: {analytics.total_feedback}",
        f"Success rate: {success_rate(analytics)}%",
        f"Avg match score: {analytics.average_match_score:g}%",
        f"Avg rating: {rating}",
        "",
        "Feedback by type:",
    ]

    for label, count, share in type_breakdown(analytics):
        lines.append(f"  {label}: {count} ({share}%)")

    if analytics.recent_trends:
        lines.append("")
        lines.append("Recent trends:")
        for trend in analytics.recent_trends:
            arrow = "↑" if trend.is_increasing else "↓"
            label = FEEDBACK_TYPE_LABELS.get(trend.type, trend.type)
            lines.append(
                f"  {arrow} {label}: {trend.recent} recent of {trend.total} ({trend.recent_share}%)"
            )

    if analytics.common_concerns:
        lines.append("")
        lines.append(f"Common concerns: {', '.join(analytics.common_concerns)}")

    notes = insights(analytics)
    if notes:
        lines.append("")
        lines.extend(f"💡 {note}" for note in notes)

    return lines
