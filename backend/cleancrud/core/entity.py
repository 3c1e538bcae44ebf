"""Entity Building Blocks — identity, aggregate roots and the domain rule error.

Invariants:
    - Entities compare and hash by (type, id), never by attribute values
    - State is read through properties; writes go through business methods
    - DomainRuleError always carries a core Error (validation, business_rule or not_found)

Design Decisions:
    - Plain classes with private attributes over dataclasses: a dataclass
      would expose settable fields and value equality, both wrong for entities
    - AggregateRoot is a marker subclass: the boundary is expressed by which
      repositories exist (one per root), not by runtime machinery
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from cleancrud.core.result import Error, ErrorKind


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainRuleError(Exception):
    """An entity or value object refused a change that would break an invariant."""

    def __init__(self, error: Error):
        super().__init__(error.message)
        self.error = error

    @classmethod
    def invalid(cls, code: str, message: str, field: str | None = None) -> "DomainRuleError":
        return cls(Error(code, message, ErrorKind.VALIDATION, field))

    @classmethod
    def broken(cls, code: str, message: str) -> "DomainRuleError":
        return cls(Error(code, message, ErrorKind.BUSINESS_RULE))

    @classmethod
    def missing(cls, code: str, message: str) -> "DomainRuleError":
        return cls(Error(code, message, ErrorKind.NOT_FOUND))


class Entity:
    """Object with persistent identity."""

    def __init__(self, id: UUID | None = None):
        self._id = id or uuid4()

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id})"


class AggregateRoot(Entity):
    """Consistency boundary: children are reached and changed only through the root."""

    def __init__(
        self,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        super().__init__(id)
        self._created_at = created_at or utcnow()
        self._updated_at = updated_at or self._created_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = utcnow()
