from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, PlainSerializer

T = TypeVar("T")

# Cents travel as decimal strings in JSON so 64-bit amounts survive JS clients.
Cents = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]

# Percentages travel as plain numbers (10.5 means 10.5%).
Pct = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Raw user input for money/percent fields: "1.234,56", "10,5", 1500, 2.5 ...
MoneyInput = str | int | float | None
PctInput = str | int | float | None


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None

    @classmethod
    def ok(cls, data: T, meta: dict | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, meta=meta)

    @classmethod
    def fail(cls, error: str, meta: dict | None = None) -> "ApiResponse[None]":
        return cls(success=False, error=error, meta=meta)
