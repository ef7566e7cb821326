"""Domain models for the work order store."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass
class WorkOrder:
    """Work order entity."""

    order_id: str
    size: str
    filled: str
    status: str
    ticker: str
    mic: str
    action: str
    timestamp: datetime
    last_modified: datetime

    def __post_init__(self) -> None:
        self.order_id = self.order_id.strip()
        self.timestamp = as_utc(self.timestamp)
        self.last_modified = as_utc(self.last_modified)

    @classmethod
    def create(
        cls,
        order_id: str,
        size: str,
        filled: str,
        status: str,
        ticker: str,
        mic: str,
        action: str,
    ) -> "WorkOrder":
        """Build a new order stamped with the current time."""
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            size=size,
            filled=filled,
            status=status,
            ticker=ticker,
            mic=mic,
            action=action,
            timestamp=now,
            last_modified=now,
        )

    def touched(self, **changes: str) -> "WorkOrder":
        """Return a copy with the given fields changed and last_modified bumped."""
        now = max(datetime.now(UTC), self.timestamp)
        return replace(self, last_modified=now, **changes)

    def validate(self) -> None:
        """Raise ValueError if the order cannot be persisted."""
        if not self.order_id:
            raise ValueError("order_id must not be empty")
        if self.last_modified < self.timestamp:
            raise ValueError(
                f"last_modified {self.last_modified} is earlier than timestamp {self.timestamp}"
            )

    def __str__(self) -> str:
        return (
            f"[order_id: {self.order_id}, size: {self.size}, filled: {self.filled}, "
            f"status: {self.status}, ticker: {self.ticker}, mic: {self.mic}, "
            f"action: {self.action}, timestamp: {self.timestamp}, "
            f"last_modified: {self.last_modified}]"
        )
