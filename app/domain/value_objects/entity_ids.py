"""Entity ID value objects"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class UserId:
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError("User ID must be a valid UUID")

    @classmethod
    def generate(cls) -> 'UserId':
        """Generate a new random UUID"""
        return cls(uuid4())

    @classmethod
    def from_str(cls, uuid_str: str) -> 'UserId':
        """Create UserId from string representation"""
        return cls(UUID(uuid_str))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SessionId:
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError("Session ID must be a valid UUID")

    @classmethod
    def generate(cls) -> 'SessionId':
        """Generate a new random UUID"""
        return cls(uuid4())

    @classmethod
    def from_str(cls, uuid_str: str) -> 'SessionId':
        """Create SessionId from string representation"""
        return cls(UUID(uuid_str))

    def __str__(self) -> str:
        return str(self.value)
