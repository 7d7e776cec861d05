"""Mongo query construction for the list endpoints."""

import re
from datetime import date
from enum import Enum
from typing import Optional

PENDING = "PENDING"
OVERDUE = "OVERDUE"


def build_filter_query(
    counterparty_field: str,
    *,
    today: date,
    status: Optional[Enum | str] = None,
    counterparty: Optional[str] = None,
    due_from: Optional[date] = None,
    due_to: Optional[date] = None,
) -> dict:
    """
    Translate optional list filters into one conjunctive query document.

    Rules:
    - status matches the status the caller sees after overdue derivation:
      OVERDUE is stored PENDING with due_date < today, PENDING is stored
      PENDING with due_date >= today, anything else is an exact match
    - counterparty is a case-insensitive substring match on counterparty_field
    - due_from / due_to are inclusive bounds on due_date
    - no filters gives {} which matches every document
    """
    query: dict = {}
    due_clauses: list[dict] = []

    if status is not None:
        value = status.value if isinstance(status, Enum) else status
        if value == OVERDUE:
            query["status"] = PENDING
            due_clauses.append({"due_date": {"$lt": today.isoformat()}})
        elif value == PENDING:
            query["status"] = PENDING
            due_clauses.append({"due_date": {"$gte": today.isoformat()}})
        else:
            query["status"] = value

    if counterparty is not None and counterparty.strip():
        query[counterparty_field] = {"$regex": re.escape(counterparty), "$options": "i"}

    due_range = {}
    if due_from is not None:
        due_range["$gte"] = due_from.isoformat()
    if due_to is not None:
        due_range["$lte"] = due_to.isoformat()
    if due_range:
        due_clauses.append({"due_date": due_range})

    # Separate clauses so the status bound and the range never overwrite each other
    if len(due_clauses) == 1:
        query.update(due_clauses[0])
    elif due_clauses:
        query["$and"] = due_clauses

    return query
