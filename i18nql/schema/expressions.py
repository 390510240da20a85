"""Constants and helpers for QueryPlan expression and predicate types.

Predicates are represented as plain ``{OP: args}`` dicts in the QueryPlan
model (``dict[str, Any]``).  This module defines the allowable key sets, a
few inspection helpers used by the compiler, and small constructors used by
the i18n planner so predicate shapes are spelled out in one place.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Predicate operator enums
# ---------------------------------------------------------------------------


class ComparisonOp(str, Enum):
    """Binary comparison operators (2 operands)."""

    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"


class PatternOp(str, Enum):
    """Pattern-match operator (2 operands: value, pattern)."""

    LIKE = "LIKE"


class MembershipOp(str, Enum):
    """Membership operator (operand + values)."""

    IN = "IN"


class NullOp(str, Enum):
    """Null-check operators (1 operand)."""

    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"


class LogicalOp(str, Enum):
    """Logical connectives."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


# ---------------------------------------------------------------------------
# Key constants
# ---------------------------------------------------------------------------

#: Binary comparison operators: take a 2-element list of operands.
COMPARISON_OPS: frozenset[str] = frozenset(op.value for op in ComparisonOp)

#: Null-check operators: take a single operand.
NULL_OPS: frozenset[str] = frozenset(op.value for op in NullOp)

#: All logical operators.
LOGICAL_OPS: frozenset[str] = frozenset(op.value for op in LogicalOp)

#: Complete set of supported predicate operators.
ALL_PREDICATE_OPS: frozenset[str] = (
    COMPARISON_OPS
    | frozenset(op.value for op in PatternOp)
    | frozenset(op.value for op in MembershipOp)
    | NULL_OPS
    | LOGICAL_OPS
)

# ---------------------------------------------------------------------------
# Inspection helpers
# ---------------------------------------------------------------------------


def predicate_op(pred: dict) -> str | None:
    """Returns the predicate operator key or ``None`` if not recognised.

    Args:
        pred: A dict representing a predicate node.

    Returns:
        The operator string (e.g. ``'EQ'``, ``'AND'``) or ``None``.
    """
    if not isinstance(pred, dict) or len(pred) != 1:
        return None
    key = next(iter(pred))
    return key if key in ALL_PREDICATE_OPS else None


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def col(table: str, column: str) -> dict[str, str]:
    """Return a ``{"col": "table.column"}`` operand dict."""
    return {"col": f"{table}.{column}"}


def eq(left: dict, right: dict) -> dict[str, Any]:
    """Return an ``EQ`` predicate comparing two operand dicts."""
    return {ComparisonOp.EQ.value: [left, right]}


def is_not_null(operand: dict) -> dict[str, Any]:
    """Return an ``IS_NOT_NULL`` predicate on ``operand``."""
    return {NullOp.IS_NOT_NULL.value: operand}


def and_(*preds: dict) -> dict[str, Any]:
    """Combine predicates with AND, flattening nested AND nodes."""
    return {LogicalOp.AND.value: _flatten(LogicalOp.AND.value, preds)}


def or_(*preds: dict) -> dict[str, Any]:
    """Combine predicates with OR, flattening nested OR nodes."""
    return {LogicalOp.OR.value: _flatten(LogicalOp.OR.value, preds)}


def _flatten(op: str, preds: tuple[dict, ...]) -> list[dict]:
    flat: list[dict] = []
    for pred in preds:
        if predicate_op(pred) == op:
            flat.extend(pred[op])
        else:
            flat.append(pred)
    return flat
