"""Pure calculations behind the dashboard statistics"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..entities.recording import Recording
from ..enums import SpinCategory

TREND_WEEKS = 4
TOP_QUESTIONS_LIMIT = 5


@dataclass
class SpinTrends:
    labels: List[str] = field(default_factory=list)
    scores: List[int] = field(default_factory=list)


@dataclass
class QuestionInsight:
    question: str
    category: str
    usage_count: int
    success_rate: float


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (``round`` would use banker's rounding)."""
    return int(math.floor(value + 0.5))


def average_spin_score(recordings: Iterable[Recording]) -> int:
    """Integer mean of the overall SPIN score; recordings without one are skipped."""
    scores = [r.spin_overall_score for r in recordings if r.spin_overall_score is not None]
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def sentiment_distribution(recordings: Iterable[Recording]) -> Dict[str, int]:
    """Percentage of positive / neutral / negative calls.

    Labels are matched by substring so "very_positive" counts as positive.
    Each bucket is rounded independently, so the sum may be 99 or 101.
    """
    counts = {"positive": 0, "neutral": 0, "negative": 0}
    for recording in recordings:
        label = recording.sentiment_label
        if not label:
            continue
        if "positive" in label:
            counts["positive"] += 1
        elif "negative" in label:
            counts["negative"] += 1
        else:
            counts["neutral"] += 1

    total = max(1, sum(counts.values()))
    return {bucket: round_half_up(count / total * 100) for bucket, count in counts.items()}


def spin_trends(recordings: Sequence[Recording], now: Optional[datetime] = None, weeks: int = TREND_WEEKS) -> SpinTrends:
    """Average overall SPIN score for each of the trailing ``weeks`` seven-day spans.

    Spans end at ``now`` and are labelled "Week 1" (oldest) to "Week N"
    (most recent). A span without scored recordings reports 0.
    """
    now = now or datetime.utcnow()
    trends = SpinTrends()
    for offset in range(weeks - 1, -1, -1):
        week_end = now - timedelta(days=7 * offset)
        week_start = week_end - timedelta(days=7)
        weekly = [
            r.spin_overall_score
            for r in recordings
            if week_start < r.created_at <= week_end and r.spin_overall_score is not None
        ]
        trends.labels.append(f"Week {weeks - offset}")
        trends.scores.append(round_half_up(sum(weekly) / len(weekly)) if weekly else 0)
    return trends


def trend_window_start(now: datetime, weeks: int = TREND_WEEKS) -> datetime:
    return now - timedelta(days=7 * weeks)


def weekly_improvement(scores: Sequence[int]) -> int:
    if len(scores) < 2:
        return 0
    return scores[-1] - scores[-2]


def top_performing_questions(recordings: Iterable[Recording], limit: int = TOP_QUESTIONS_LIMIT) -> List[QuestionInsight]:
    """First example question of every SPIN category, in recording order.

    No ranking is applied: the list is cut at ``limit`` entries as found.
    """
    questions: List[QuestionInsight] = []
    for recording in recordings:
        for category in SpinCategory:
            data = recording.spin_category(category)
            examples = data.get("examples") or []
            if not examples:
                continue
            questions.append(QuestionInsight(
                question=examples[0],
                category=category.value,
                usage_count=data.get("count") or 0,
                success_rate=(data.get("score") or 0) / 100,
            ))
    return questions[:limit]
