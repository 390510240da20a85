"""Operand and predicate SQL compilers.

``OperandBuilder`` and ``PredicateBuilder`` are tightly coupled: CASE and
predicate operands contain predicate conditions, and predicates contain
operands, so they share a module.

Both classes receive the dialect :class:`~i18nql.compile.base.SQLCompiler`
and a :class:`RuntimeContext` (per-query parameter state).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from i18nql.compile.base import SQLCompiler
from i18nql.errors import CompilationError
from i18nql.schema.expressions import ComparisonOp
from i18nql.schema.operands import (
    CaseBody,
    CaseOperand,
    ColumnOperand,
    FuncOperand,
    Operand,
    ParamOperand,
    PredicateOperand,
    ValueOperand,
    to_operand,
)


# ---------------------------------------------------------------------------
# Runtime parameter accumulator (shared across all sub-builders in one run)
# ---------------------------------------------------------------------------


@dataclass
class RuntimeContext:
    """Accumulates named parameters during a single compilation run.

    A single instance is threaded through every sub-builder so that
    placeholder names are unique for the entire statement.
    """

    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, value: Any) -> str:
        """Store a literal value and return its placeholder name."""
        name = f"param_{self._counter}"
        self._counter += 1
        self.params[name] = value
        return name


# ---------------------------------------------------------------------------
# Operand builder
# ---------------------------------------------------------------------------


class OperandBuilder:
    """Compiles typed :class:`~i18nql.schema.operands.Operand` nodes to SQL.

    Args:
        compiler: Dialect-specific compiler.
        runtime: Shared parameter accumulator for this query.
        predicate_builder: PredicateBuilder for CASE WHEN and predicate operands.
    """

    def __init__(
        self,
        compiler: SQLCompiler,
        runtime: RuntimeContext,
        predicate_builder: "PredicateBuilder",
    ) -> None:
        self._compiler = compiler
        self._runtime = runtime
        self._pred = predicate_builder

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, operand: Operand) -> str:
        """Compile a typed operand to a SQL fragment."""
        if isinstance(operand, ColumnOperand):
            return self.build_col_ref(operand.col)
        if isinstance(operand, ValueOperand):
            name = self._runtime.add_value(operand.value)
            return self._compiler.param_placeholder(name)
        if isinstance(operand, ParamOperand):
            return self._compiler.param_placeholder(operand.param)
        if isinstance(operand, FuncOperand):
            return self._compiler.build_func_call(operand.func, operand.args, self.build)
        if isinstance(operand, CaseOperand):
            return self._build_case(operand.case)
        if isinstance(operand, PredicateOperand):
            return f"({self._pred.build(operand.pred)})"
        raise CompilationError(
            f"Unknown operand type: {type(operand).__name__}", clause="expression"
        )

    def build_col_ref(self, col: str) -> str:
        """Quote a ``qualifier.column`` or bare ``column`` reference."""
        quote = self._compiler.quote_identifier
        if "." in col:
            table, column = col.split(".", 1)
            return f"{quote(table)}.{quote(column)}"
        return quote(col)

    # ------------------------------------------------------------------
    # Operand sub-compilers
    # ------------------------------------------------------------------

    def _build_case(self, case_body: CaseBody) -> str:
        parts = ["CASE"]
        for when in case_body.when:
            cond_sql = self._pred.build(when.condition)
            then_sql = self.build(when.then)
            parts.append(f"WHEN {cond_sql} THEN {then_sql}")
        if case_body.else_val is not None:
            parts.append(f"ELSE {self.build(case_body.else_val)}")
        parts.append("END")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Predicate builder
# ---------------------------------------------------------------------------


class PredicateBuilder:
    """Compiles predicate dicts (join ON / WHERE nodes) to SQL.

    Predicates remain as ``dict[str, Any]``; operands embedded within them
    are converted via :func:`~i18nql.schema.operands.to_operand`.

    Args:
        compiler: Dialect-specific compiler.
        runtime: Shared parameter accumulator.
        operand_builder: OperandBuilder for operand-level args.
    """

    def __init__(
        self,
        compiler: SQLCompiler,
        runtime: RuntimeContext,
        operand_builder: OperandBuilder,
    ) -> None:
        self._compiler = compiler
        self._runtime = runtime
        self._op = operand_builder

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, pred: dict) -> str:
        """Compile a predicate dict to a SQL fragment."""
        if not isinstance(pred, dict) or len(pred) != 1:
            raise CompilationError(f"Invalid predicate shape: {pred!r}")
        op = next(iter(pred))
        args = pred[op]
        return self._dispatch(op, args)

    # ------------------------------------------------------------------
    # Operator dispatch
    # ------------------------------------------------------------------

    _CMP: dict[str, str] = {
        ComparisonOp.EQ: "=",
        ComparisonOp.NE: "!=",
        ComparisonOp.GT: ">",
        ComparisonOp.GTE: ">=",
        ComparisonOp.LT: "<",
        ComparisonOp.LTE: "<=",
    }

    def _dispatch(self, op: str, args: Any) -> str:
        if op in self._CMP:
            left = self._op.build(to_operand(args[0]))
            right = self._op.build(to_operand(args[1]))
            return f"{left} {self._CMP[op]} {right}"

        if op == "IN":
            val = self._op.build(to_operand(args[0]))
            values = ", ".join(self._op.build(to_operand(a)) for a in args[1:])
            return f"{val} IN ({values})"

        if op == "IS_NULL":
            return f"{self._op.build(to_operand(args))} IS NULL"

        if op == "IS_NOT_NULL":
            return f"{self._op.build(to_operand(args))} IS NOT NULL"

        if op == "LIKE":
            left = self._op.build(to_operand(args[0]))
            right = self._op.build(to_operand(args[1]))
            return f"{left} {self._compiler.like_operator()} {right}"

        if op == "AND":
            parts = [f"({self.build(p)})" for p in args]
            return " AND ".join(parts)

        if op == "OR":
            parts = [f"({self.build(p)})" for p in args]
            return " OR ".join(parts)

        if op == "NOT":
            return f"NOT ({self.build(args)})"

        raise CompilationError(f"Unknown predicate operator '{op}'.")
