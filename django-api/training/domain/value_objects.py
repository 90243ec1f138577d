"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self


@dataclass(frozen=True)
class TenantId:
    """Identity of the tenant every query and write is scoped to."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Tenant id must be a positive integer")

    @classmethod
    def from_raw(cls, value: object) -> Self:
        if isinstance(value, bool):
            raise ValueError("Tenant id must be an integer")
        if isinstance(value, int):
            return cls(value=value)
        if isinstance(value, str) and value.strip().isdigit():
            return cls(value=int(value.strip()))
        raise ValueError("Tenant id must be an integer")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not self.amount.is_finite():
            raise ValueError("Money amount must be a finite number")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def from_raw(cls, value: object) -> Self:
        if isinstance(value, bool) or value is None:
            raise ValueError("Money amount must be a number")
        try:
            return cls(amount=Decimal(str(value).strip()))
        except InvalidOperation as exc:
            raise ValueError("Money amount must be a number") from exc

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
