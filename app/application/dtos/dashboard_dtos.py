"""Dashboard DTOs"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class DashboardQueryDto(BaseModel):
    period: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SentimentDistributionDto(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class SpinTrendsDto(BaseModel):
    labels: List[str]
    scores: List[int]


class QuestionInsightDto(BaseModel):
    question: str
    category: str
    usage_count: int
    success_rate: float


class DashboardStatsDto(BaseModel):
    total_calls: int
    avg_spin_score: int
    total_appointments: int
    weekly_improvement: int
    sentiment_distribution: SentimentDistributionDto
    spin_trends: SpinTrendsDto
    top_performing_questions: List[QuestionInsightDto]
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None
