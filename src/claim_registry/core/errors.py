# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Service error kinds and the aggregated violation collector.

Every claim operation reports failure as ``Err(ServiceError)``. A
``ServiceError`` carries one kind and the ordered list of human-readable
messages that caused it; operations gather those messages with a
``ViolationCollector`` instead of stopping at the first failed check.
"""

from collections.abc import Iterable
from enum import Enum

from attrs import field, frozen
from beartype import beartype


class ErrorKind(str, Enum):
    """Classification of service failures."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal_error"

    @property
    def status_code(self) -> int:
        """HTTP status surfaced for this kind.

        Conflicts are reported as plain bad requests.
        """
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INTERNAL: 500,
}


@frozen
class ServiceError:
    """Structured failure returned inside ``Err``."""

    kind: ErrorKind
    messages: tuple[str, ...] = field(converter=tuple)

    @classmethod
    @beartype
    def validation(cls, messages: Iterable[str]) -> "ServiceError":
        return cls(ErrorKind.VALIDATION, messages)

    @classmethod
    @beartype
    def not_found(cls, messages: Iterable[str]) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, messages)

    @classmethod
    @beartype
    def conflict(cls, messages: Iterable[str]) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, messages)

    @classmethod
    @beartype
    def internal(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.INTERNAL, (message,))

    @property
    def message(self) -> str:
        """All messages joined into one line."""
        return "; ".join(self.messages)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ViolationCollector:
    """Accumulate violation messages across independent checks."""

    def __init__(self, messages: Iterable[str] = ()) -> None:
        self._messages: list[str] = list(messages)

    @beartype
    def add(self, message: str | None) -> None:
        """Record a violation; ``None`` means the check passed."""
        if message is not None:
            self._messages.append(message)

    @beartype
    def extend(self, messages: Iterable[str | None]) -> None:
        for message in messages:
            self.add(message)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @beartype
    def to_error(self, kind: ErrorKind = ErrorKind.VALIDATION) -> ServiceError:
        return ServiceError(kind, self._messages)
