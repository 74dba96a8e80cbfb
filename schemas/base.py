from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated
from pydantic import BaseModel, AfterValidator, PlainSerializer
from pydantic.alias_generators import to_camel
from utils.timeutils import ensure_utc

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


# Whole cents in memory (matches the Numeric(10, 2) columns), plain JSON numbers on the wire
Money = Annotated[
    Decimal,
    AfterValidator(round_money),
    PlainSerializer(float, return_type=float, when_used="json"),
]

UtcDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
