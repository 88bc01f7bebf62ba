"""Domain entity — a client record with audit fields and a soft-delete flag."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Client:
    """Core domain entity for a client.

    The audit fields (``created_at``, ``last_modified_at``) and the
    ``deleted`` flag are owned by the lifecycle service; the mutators below
    take the timestamp from the caller so a single clock drives every change.
    """

    name: str
    address: str | None = None
    age: int | None = None
    phone: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    last_modified_at: datetime | None = None
    deleted: bool = False

    def __post_init__(self) -> None:
        if self.last_modified_at is None:
            self.last_modified_at = self.created_at

    def apply_changes(
        self,
        *,
        name: str,
        address: str | None,
        age: int | None,
        phone: str | None,
        now: datetime,
    ) -> None:
        """Overwrite business fields and refresh last_modified_at."""
        self.name = name
        self.address = address
        self.age = age
        self.phone = phone
        self.last_modified_at = now

    def mark_deleted(self, now: datetime) -> bool:
        """Soft-delete the record, stamping ``now`` even on a repeat.

        Returns False when it was already deleted.
        """
        was_live = not self.deleted
        self.deleted = True
        self.last_modified_at = now
        return was_live

    def restore(self, now: datetime) -> bool:
        """Undo a soft delete. Returns False when the record was live."""
        if not self.deleted:
            return False
        self.deleted = False
        self.last_modified_at = now
        return True
