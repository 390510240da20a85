"""Unit tests for the QueryPlan builder methods and operand parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from i18nql.errors import PlanError
from i18nql.schema.expressions import and_, or_, predicate_op
from i18nql.schema.operands import (
    CaseOperand,
    ColumnOperand,
    PredicateOperand,
    ValueOperand,
    to_operand,
)
from i18nql.schema.query_plan import JoinClause, QueryPlan

A = {"IS_NOT_NULL": {"col": "a.ID"}}
B = {"IS_NOT_NULL": {"col": "b.ID"}}
C = {"IS_NULL": {"col": "c.ID"}}


def _join(alias: str) -> JoinClause:
    return JoinClause(
        table="product_i18n",
        alias=alias,
        type="LEFT",
        on={"EQ": [{"col": "product.ID"}, {"col": f"{alias}.ID"}]},
    )


def test_base_table_name_and_qualifier():
    plan = QueryPlan.for_table("product")
    assert plan.base_table_name == "product"
    assert plan.base_qualifier == "product"

    aliased = QueryPlan.for_table("product", alias="p")
    assert aliased.base_table_name == "product"
    assert aliased.base_qualifier == "p"


def test_add_join_condition_ands_into_on_clause():
    plan = QueryPlan.for_table("product").add_join(_join("t"))
    plan.add_join_condition("t", {"EQ": [{"col": "t.LOCALE"}, {"value": "en_US"}]})
    assert plan.JOIN[0].on == {
        "AND": [
            {"EQ": [{"col": "product.ID"}, {"col": "t.ID"}]},
            {"EQ": [{"col": "t.LOCALE"}, {"value": "en_US"}]},
        ]
    }


def test_add_join_condition_unknown_alias():
    plan = QueryPlan.for_table("product")
    with pytest.raises(PlanError) as exc_info:
        plan.add_join_condition("missing", A)
    assert exc_info.value.alias == "missing"


def test_get_join_returns_latest_duplicate():
    first, second = _join("t"), _join("t")
    plan = QueryPlan.for_table("product").add_join(first).add_join(second)
    assert plan.get_join("t") is second
    assert plan.get_join("other") is None


def test_add_derived_column_parses_operands():
    plan = QueryPlan.for_table("product")
    plan.add_derived_column({"col": "t.TITLE"}, "i18n_TITLE")
    plan.add_derived_column({"pred": A}, "IS_TRANSLATED")
    plan.add_derived_column(
        {"case": {"when": [{"if": A, "then": {"col": "a.X"}}], "else": {"col": "b.X"}}},
        "X",
    )
    assert isinstance(plan.DERIVED[0].expr, ColumnOperand)
    assert isinstance(plan.DERIVED[1].expr, PredicateOperand)
    assert isinstance(plan.DERIVED[2].expr, CaseOperand)
    assert plan.derived_aliases == ["i18n_TITLE", "IS_TRANSLATED", "X"]


def test_or_filter_combines_with_last_condition():
    plan = QueryPlan.for_table("product")
    plan.add_filter(C).add_filter(A).or_filter(B)
    assert plan.WHERE == [C, {"OR": [A, B]}]


def test_or_filter_on_empty_where_adds_condition():
    plan = QueryPlan.for_table("product").or_filter(A)
    assert plan.WHERE == [A]


def test_or_filter_flattens_chained_ors():
    plan = QueryPlan.for_table("product").add_filter(A).or_filter(B).or_filter(C)
    assert plan.WHERE == [{"OR": [A, B, C]}]


def test_and_or_constructors_flatten_same_operator_only():
    assert and_(and_(A, B), C) == {"AND": [A, B, C]}
    assert or_(and_(A, B), C) == {"OR": [{"AND": [A, B]}, C]}
    assert predicate_op(or_(A, B)) == "OR"


def test_case_condition_key_alias():
    operand = to_operand(
        {"case": {"when": [{"condition": A, "then": {"value": 1}}]}}
    )
    assert operand.case.when[0].condition == A
    assert operand.case.when[0].then == ValueOperand(value=1)
    assert operand.case.else_val is None


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        QueryPlan.model_validate({"FROM": {"table": "product"}, "HAVING": {}})
