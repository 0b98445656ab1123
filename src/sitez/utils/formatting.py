# src/sitez/utils/formatting.py
from __future__ import annotations


def format_brl(amount: float) -> str:
    """Format like pt-BR currency: R$ 1.234.567,89"""
    sign = "-" if amount < 0 else ""
    whole, cents = f"{abs(amount):,.2f}".split(".")
    whole = whole.replace(",", ".")
    return f"{sign}R$ {whole},{cents}"


def budget_used_pct(spent: float, budget: float) -> float:
    if not budget:
        return 0.0
    return spent / budget * 100


def format_pct(value: float) -> str:
    return f"{value:.0f}%"
