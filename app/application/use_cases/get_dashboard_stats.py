"""Dashboard statistics use case"""

from datetime import datetime
from typing import Optional

from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services import dashboard_statistics as stats
from ...domain.value_objects.date_window import DateWindow
from ...domain.value_objects.entity_ids import UserId
from ..dtos.dashboard_dtos import (
    DashboardQueryDto,
    DashboardStatsDto,
    QuestionInsightDto,
    SentimentDistributionDto,
    SpinTrendsDto,
)


class GetDashboardStatsUseCase:
    """Aggregate a user's recordings and appointments for the dashboard.

    Totals, averages, sentiment and top questions are scoped to the resolved
    window (all time when no parameter is given). Trends always cover the
    four weeks ending now, whatever the window.
    """

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        user_id: UserId,
        query: Optional[DashboardQueryDto] = None,
        now: Optional[datetime] = None,
    ) -> DashboardStatsDto:
        query = query or DashboardQueryDto()
        now = now or datetime.utcnow()
        window = DateWindow.resolve(query.period, query.start_date, query.end_date, now=now)
        trend_window = DateWindow(start=stats.trend_window_start(now), end=now)

        async with self.unit_of_work:
            recordings = await self.unit_of_work.recordings.find_for_user(user_id, window)
            total_appointments = await self.unit_of_work.appointments.count_for_user(user_id, window)
            recent = await self.unit_of_work.recordings.find_for_user(user_id, trend_window)

        trends = stats.spin_trends(recent, now=now)
        sentiment = stats.sentiment_distribution(recordings)

        return DashboardStatsDto(
            total_calls=len(recordings),
            avg_spin_score=stats.average_spin_score(recordings),
            total_appointments=total_appointments,
            weekly_improvement=stats.weekly_improvement(trends.scores),
            sentiment_distribution=SentimentDistributionDto(**sentiment),
            spin_trends=SpinTrendsDto(labels=trends.labels, scores=trends.scores),
            top_performing_questions=[
                QuestionInsightDto(
                    question=q.question,
                    category=q.category,
                    usage_count=q.usage_count,
                    success_rate=q.success_rate,
                )
                for q in stats.top_performing_questions(recordings)
            ],
            window_start=window.start if window else None,
            window_end=window.end if window else None,
        )
