from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class Money:
    amount_minor: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if self.amount_minor < 0:
            raise ValueError("amount_minor must be >= 0")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValueError("cannot add money in different currencies")
        return Money(amount_minor=self.amount_minor + other.amount_minor, currency=self.currency)

    def times(self, quantity: int) -> Money:
        return Money(amount_minor=self.amount_minor * quantity, currency=self.currency)

    @classmethod
    def zero(cls) -> Money:
        return cls(amount_minor=0)

    @classmethod
    def from_major(cls, value: float | int) -> Money:
        return cls(amount_minor=int(round(float(value) * 100)))

    def to_major(self) -> float:
        return self.amount_minor / 100

    def format(self) -> str:
        major = self.to_major()
        if major.is_integer():
            return f"₹{int(major)}"
        return f"₹{major:.2f}"
