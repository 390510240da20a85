"""Clause-level SQL builders.

Each class handles exactly one SQL clause.

Classes
-------
SelectClauseBuilder: ``SELECT <items>, <derived columns>``
FromClauseBuilder: ``FROM <table> [AS <alias>]``
JoinClauseBuilder: ``<type> JOIN <table> AS <alias> ON …``
"""
from __future__ import annotations

from i18nql.compile.base import SQLCompiler
from i18nql.compile.expression_builder import OperandBuilder, PredicateBuilder
from i18nql.schema.query_plan import (
    DerivedColumn,
    FromClause,
    JoinClause,
    QueryPlan,
    SelectItem,
)


class SelectClauseBuilder:
    """Builds the ``SELECT …`` clause, derived columns included."""

    def __init__(self, compiler: SQLCompiler, operand_builder: OperandBuilder) -> None:
        self._compiler = compiler
        self._op = operand_builder

    def build(self, plan: QueryPlan) -> str:
        if plan.SELECT:
            items = [self._build_item(item) for item in plan.SELECT]
        else:
            items = [f"{self._compiler.quote_identifier(plan.base_qualifier)}.*"]
        items.extend(self._build_derived(d) for d in plan.DERIVED)
        return f"SELECT {', '.join(items)}"

    def _build_item(self, item: SelectItem) -> str:
        expr_sql = self._op.build(item.expr)
        if item.alias:
            return f"{expr_sql} AS {self._compiler.quote_identifier(item.alias)}"
        return expr_sql

    def _build_derived(self, derived: DerivedColumn) -> str:
        expr_sql = self._op.build(derived.expr)
        return f"{expr_sql} AS {self._compiler.quote_identifier(derived.alias)}"


class FromClauseBuilder:
    """Builds the ``FROM <table>`` fragment."""

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, frm: FromClause) -> str:
        quote = self._compiler.quote_identifier
        table_sql = quote(frm.table)
        if frm.alias:
            table_sql = f"{table_sql} AS {quote(frm.alias)}"
        return table_sql


class JoinClauseBuilder:
    """Builds a single ``JOIN … ON …`` fragment."""

    def __init__(self, compiler: SQLCompiler, predicate_builder: PredicateBuilder) -> None:
        self._compiler = compiler
        self._pred = predicate_builder

    def build(self, join: JoinClause) -> str:
        quote = self._compiler.quote_identifier
        on_sql = self._pred.build(join.on)
        return f"{join.type} JOIN {quote(join.table)} AS {quote(join.alias)} ON {on_sql}"
