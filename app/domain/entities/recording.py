"""Call recording entity (read side)"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from ..enums import RecordingStatus, SpinCategory
from ..value_objects.entity_ids import UserId


@dataclass
class Recording:
    """A call recording with the analysis blob produced by the analysis vendor.

    The blob is stored as-is; accessors below only dig out the fields the
    dashboard needs and return ``None`` when they are missing.
    """

    id: UUID
    user_id: UserId
    title: str
    status: RecordingStatus = RecordingStatus.ACTIVE
    analysis: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def spin(self) -> Dict[str, Any]:
        return (self.analysis or {}).get("spin") or {}

    @property
    def spin_overall_score(self) -> Optional[float]:
        return (self.spin.get("overall") or {}).get("score")

    @property
    def sentiment_label(self) -> Optional[str]:
        return ((self.analysis or {}).get("sentiment") or {}).get("overall")

    def spin_category(self, category: SpinCategory) -> Dict[str, Any]:
        return self.spin.get(category.value) or {}
