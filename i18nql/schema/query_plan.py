"""Pydantic models for the i18nQL QueryPlan.

A ``QueryPlan`` is a mutable builder describing a single ``SELECT`` over a
base table.  Callers (and the i18n planner) attach explicit joins, derived
columns and WHERE conditions through its domain methods; the compiler in
:mod:`i18nql.compile` renders it to parameterized SQL.

Join ``ON`` conditions and WHERE conditions are predicate dicts in the
``{OP: args}`` shape described in :mod:`i18nql.schema.expressions`.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from i18nql.errors import PlanError
from i18nql.schema.expressions import and_, or_
from i18nql.schema.operands import Operand

#: Join types the compiler knows how to render.
JoinType = Literal["INNER", "LEFT"]


class SelectItem(BaseModel):
    """A single item in the SELECT clause.

    Attributes:
        expr: A typed operand.
        alias: Optional SQL alias for the expression.
    """

    model_config = ConfigDict(extra="forbid")

    expr: Operand
    alias: str | None = None


class FromClause(BaseModel):
    """The FROM clause: the base table of the query.

    Attributes:
        table: Table name.
        alias: Optional table alias.
    """

    model_config = ConfigDict(extra="forbid")

    table: str
    alias: str | None = None


class JoinClause(BaseModel):
    """A single JOIN entry with an explicit ON condition.

    Attributes:
        table: Joined table name.
        alias: Alias under which the joined table's columns are referenced.
        type: SQL join type.
        on: Root predicate dict of the ON clause.
    """

    model_config = ConfigDict(extra="forbid")

    table: str
    alias: str
    type: JoinType = "INNER"
    on: dict[str, Any]


class DerivedColumn(BaseModel):
    """A computed output column (``<expr> AS <alias>``).

    Attributes:
        expr: Typed operand producing the value.
        alias: Output column name.
    """

    model_config = ConfigDict(extra="forbid")

    expr: Operand
    alias: str


class OrderByItem(BaseModel):
    """A single ORDER BY expression.

    Attributes:
        expr: Typed operand to order by.
        direction: Sort direction.
    """

    model_config = ConfigDict(extra="forbid")

    expr: Operand
    direction: Literal["ASC", "DESC"] = "ASC"


class LimitClause(BaseModel):
    """LIMIT clause.

    Attributes:
        value: Maximum number of rows; must be a positive integer.
    """

    model_config = ConfigDict(extra="forbid")

    value: int


class QueryPlan(BaseModel):
    """A SELECT over one base table, built up incrementally.

    Attributes:
        FROM: The base table.
        SELECT: Explicit select items.  When absent every column of the base
            table is selected (``<base>.*``).
        JOIN: Joins in the order they were added.
        WHERE: Conditions combined with AND.
        DERIVED: Computed columns appended after the select items.
        ORDER_BY: List of ordering items.
        LIMIT: Maximum rows.
    """

    model_config = ConfigDict(extra="forbid")

    FROM: FromClause
    SELECT: list[SelectItem] | None = None
    JOIN: list[JoinClause] = Field(default_factory=list)
    WHERE: list[dict[str, Any]] = Field(default_factory=list)
    DERIVED: list[DerivedColumn] = Field(default_factory=list)
    ORDER_BY: list[OrderByItem] | None = None
    LIMIT: LimitClause | None = None

    @classmethod
    def for_table(cls, table: str, alias: str | None = None) -> QueryPlan:
        """Return an empty plan selecting from ``table``."""
        return cls(FROM=FromClause(table=table, alias=alias))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def base_table_name(self) -> str:
        """Name of the base table."""
        return self.FROM.table

    @property
    def base_qualifier(self) -> str:
        """Name under which base-table columns are referenced."""
        return self.FROM.alias or self.FROM.table

    def get_join(self, alias: str) -> JoinClause | None:
        """Return the most recently added join using ``alias``, if any."""
        for join in reversed(self.JOIN):
            if join.alias == alias:
                return join
        return None

    @property
    def derived_aliases(self) -> list[str]:
        """Output names of the derived columns, in insertion order."""
        return [d.alias for d in self.DERIVED]

    # ------------------------------------------------------------------
    # Builder methods
    # ------------------------------------------------------------------

    def add_join(self, join: JoinClause) -> QueryPlan:
        """Append ``join``.  Aliases are not de-duplicated."""
        self.JOIN.append(join)
        return self

    def add_join_condition(self, alias: str, predicate: dict[str, Any]) -> QueryPlan:
        """AND ``predicate`` into the ON clause of the join named ``alias``.

        Raises:
            PlanError: If no join uses ``alias``.
        """
        join = self.get_join(alias)
        if join is None:
            raise PlanError(f"No join with alias '{alias}' in plan.", alias=alias)
        join.on = and_(join.on, predicate)
        return self

    def add_derived_column(self, expr: Operand | dict, alias: str) -> QueryPlan:
        """Append a computed column ``expr AS alias``."""
        self.DERIVED.append(DerivedColumn(expr=expr, alias=alias))
        return self

    def add_filter(self, predicate: dict[str, Any]) -> QueryPlan:
        """Append a WHERE condition, ANDed with the existing ones."""
        self.WHERE.append(predicate)
        return self

    def or_filter(self, predicate: dict[str, Any]) -> QueryPlan:
        """OR ``predicate`` with the most recently added WHERE condition.

        When the plan has no condition yet, ``predicate`` becomes the first.
        """
        if not self.WHERE:
            return self.add_filter(predicate)
        self.WHERE[-1] = or_(self.WHERE[-1], predicate)
        return self
