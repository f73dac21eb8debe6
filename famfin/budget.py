"""
Monthly aggregation over pocket money, budgets and cash flow.

Pure functions over anything exposing ``month``/``date`` and ``amount``
attributes, so they work on ORM rows and on request entries alike.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_bounds(month: date) -> Tuple[date, date]:
    """Return ``[start, end)`` for the month containing ``month``."""
    start = month_start(month)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def group_by_month(entries: Iterable) -> Dict[date, float]:
    """Sum pocket money amounts per month."""
    grouped: Dict[date, float] = defaultdict(float)
    for entry in entries:
        grouped[month_start(entry.month)] += entry.amount
    return dict(grouped)


def exceeded_months(budgets: Iterable, entries: Iterable) -> List[date]:
    """Months whose allocated pocket money is above the family budget.

    Months without a budget entry are never reported.
    """
    caps = {month_start(b.month): b.amount for b in budgets}
    spent = group_by_month(entries)
    return sorted(m for m, total in spent.items() if m in caps and total > caps[m])


def round_money(value: float) -> float:
    return round(value, 2)


def monthly_summary(month: date, pocket_money: Optional[float], cash_flow: Iterable) -> Dict[str, object]:
    amounts = [entry.amount for entry in cash_flow]
    income = round_money(sum(a for a in amounts if a > 0))
    expense = round_money(sum(a for a in amounts if a < 0))
    total_income = round_money(income + (pocket_money or 0))
    return {
        "month": month_start(month),
        "pocketMoney": pocket_money or 0,
        "income": income,
        "totalIncome": total_income,
        "expense": expense,
        "total": round_money(total_income + expense),
    }
