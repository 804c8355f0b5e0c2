"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True, order=True)
class SessionId:
    """Identifier of the conference session a sheet belongs to."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("SessionId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class AttendeeId:
    """Identifier of an attendee signing up to a session."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("AttendeeId cannot be blank")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
