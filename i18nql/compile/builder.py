"""Core QueryPlan → SQL compilation logic.

``QueryBuilder`` is the top-level orchestrator.  It wires together the
clause-level and expression-level sub-builders, then assembles the
statement.  All dialect-specific behaviour is delegated to the injected
``SQLCompiler``.

Sub-builder hierarchy
---------------------
QueryBuilder
  ├── OperandBuilder       (expression_builder.py)
  ├── PredicateBuilder     (expression_builder.py)
  ├── SelectClauseBuilder  (clause_builders.py)
  ├── FromClauseBuilder    (clause_builders.py)
  └── JoinClauseBuilder    (clause_builders.py)

A single :class:`~i18nql.compile.expression_builder.RuntimeContext` is
created per ``build()`` call and shared by every sub-builder, so literal
parameter names are unique across the statement and numbered in the order
they appear in the SQL text.
"""

from __future__ import annotations

from i18nql.compile.base import CompiledSQL, SQLCompiler
from i18nql.compile.clause_builders import (
    FromClauseBuilder,
    JoinClauseBuilder,
    SelectClauseBuilder,
)
from i18nql.compile.expression_builder import (
    OperandBuilder,
    PredicateBuilder,
    RuntimeContext,
)
from i18nql.schema.query_plan import QueryPlan


class QueryBuilder:
    """Compiles a QueryPlan to parameterized SQL.

    Args:
        compiler: Dialect-specific compiler instance.
    """

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, plan: QueryPlan) -> CompiledSQL:
        """Compile ``plan`` to parameterized SQL.

        Args:
            plan: The query plan to render.

        Returns:
            :class:`~i18nql.compile.base.CompiledSQL` with ``sql`` string
            and literal ``params``.

        Raises:
            CompilationError: If an unexpected plan shape is encountered.
        """
        runtime = RuntimeContext()
        sub_builders = self._make_sub_builders(runtime)
        sql = self._build_query(plan, sub_builders)
        return CompiledSQL(
            sql=sql,
            params=runtime.params,
            dialect=self._compiler.dialect_name,
        )

    # ------------------------------------------------------------------
    # Statement assembly
    # ------------------------------------------------------------------

    def _build_query(self, plan: QueryPlan, sub_builders: dict) -> str:
        parts: list[str] = []

        parts.append(sub_builders["select"].build(plan))
        parts.append(f"FROM {sub_builders['from'].build(plan.FROM)}")

        for join in plan.JOIN:
            parts.append(sub_builders["join"].build(join))

        if plan.WHERE:
            if len(plan.WHERE) == 1:
                where_sql = sub_builders["pred"].build(plan.WHERE[0])
            else:
                where_sql = " AND ".join(
                    f"({sub_builders['pred'].build(p)})" for p in plan.WHERE
                )
            parts.append(f"WHERE {where_sql}")

        if plan.ORDER_BY:
            order_parts = [
                f"{sub_builders['op'].build(o.expr)} {o.direction}" for o in plan.ORDER_BY
            ]
            parts.append(f"ORDER BY {', '.join(order_parts)}")

        if plan.LIMIT:
            parts.append(f"LIMIT {plan.LIMIT.value}")

        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Sub-builder wiring
    # ------------------------------------------------------------------

    def _make_sub_builders(self, runtime: RuntimeContext) -> dict:
        """Construct and wire the sub-builder graph for one compilation run."""
        # Build the operand/predicate pair (mutually dependent).
        pred_builder = PredicateBuilder.__new__(PredicateBuilder)
        op_builder = OperandBuilder(self._compiler, runtime, pred_builder)
        pred_builder.__init__(self._compiler, runtime, op_builder)  # type: ignore[misc]

        return {
            "op": op_builder,
            "pred": pred_builder,
            "select": SelectClauseBuilder(self._compiler, op_builder),
            "from": FromClauseBuilder(self._compiler),
            "join": JoinClauseBuilder(self._compiler, pred_builder),
        }
