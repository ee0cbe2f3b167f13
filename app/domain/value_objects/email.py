"""Email value object"""

import re
from dataclasses import dataclass

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        normalized = (self.value or "").strip().lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise ValueError("Invalid email address format")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
