from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

MONTHS_PT_BR = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def format_day_month_time(value: datetime) -> str:
    """Ex.: ``05 de janeiro às 14:30``."""
    return f"{value.day:02d} de {MONTHS_PT_BR[value.month - 1]} às {value:%H:%M}"


def format_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M")


def format_brl(amount: Decimal | float | int | str) -> str:
    """Ex.: ``R$ 1.234,50``."""
    quantized = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    integer_part, cents = f"{abs(quantized):.2f}".split(".")
    groups = []
    while integer_part:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    return f"{sign}R$ {'.'.join(groups)},{cents}"
