"""Typed operand models for QueryPlan expressions.

Pydantic v2 discriminated-union parsing means a raw operand dict
(e.g. ``{"col": "product.ID"}``) is automatically coerced into the correct
typed model.

Usage::

    from i18nql.schema.operands import ColumnOperand
    from i18nql.schema.query_plan import DerivedColumn

    # Pydantic parses {"col": "product.REF"} -> ColumnOperand(col="product.REF")
    derived = DerivedColumn(expr={"col": "product.REF"}, alias="ref")
    assert isinstance(derived.expr, ColumnOperand)
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, model_validator

_FORBID = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Concrete operand types
# ---------------------------------------------------------------------------


class ColumnOperand(BaseModel):
    """A column reference: ``{"col": "table.column"}``."""

    model_config = _FORBID

    col: str


class ValueOperand(BaseModel):
    """A literal value, bound as a parameter: ``{"value": "en_US"}``."""

    model_config = _FORBID

    value: Any


class ParamOperand(BaseModel):
    """A runtime parameter supplied at execution: ``{"param": "LOCALE"}``."""

    model_config = _FORBID

    param: str


class FuncOperand(BaseModel):
    """A function call: ``{"func": "COALESCE", "args": [...]}``."""

    model_config = _FORBID

    func: str
    args: list[Operand] = Field(default_factory=list)


class PredicateOperand(BaseModel):
    """The boolean value of a predicate: ``{"pred": {"IS_NOT_NULL": ...}}``."""

    model_config = _FORBID

    pred: dict[str, Any]


# ---------------------------------------------------------------------------
# CASE expression sub-models
# ---------------------------------------------------------------------------


class CaseWhen(BaseModel):
    """A single ``WHEN <condition> THEN <result>`` clause.

    The condition key is ``"if"``; ``"condition"`` is also accepted and is
    normalised to ``"if"`` before field population.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # "if" is a Python keyword so we store it under the Python name
    # ``condition`` but tell Pydantic its JSON alias is ``"if"``.
    condition: dict[str, Any] = Field(alias="if")
    then: Operand

    @model_validator(mode="before")
    @classmethod
    def _normalize_condition_key(cls, data: Any) -> Any:
        """Accept ``"condition"`` as an alias for ``"if"``."""
        if isinstance(data, dict) and "condition" in data and "if" not in data:
            data = dict(data)
            data["if"] = data.pop("condition")
        return data


class CaseBody(BaseModel):
    """The body of a ``CASE`` expression."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    when: list[CaseWhen]
    # "else" is a Python keyword; stored as ``else_val``, alias ``"else"``.
    else_val: Operand | None = Field(None, alias="else")


class CaseOperand(BaseModel):
    """A CASE expression: ``{"case": {"when": [...], "else": operand}}``."""

    model_config = _FORBID

    case: CaseBody


# ---------------------------------------------------------------------------
# Discriminated union
# ---------------------------------------------------------------------------

_TAGS: tuple[tuple[str, type[BaseModel]], ...] = (
    ("col", ColumnOperand),
    ("value", ValueOperand),
    ("param", ParamOperand),
    ("func", FuncOperand),
    ("case", CaseOperand),
    ("pred", PredicateOperand),
)


def _operand_discriminator(v: Any) -> str | None:
    """Return the tag for the Pydantic discriminated union."""
    if isinstance(v, dict):
        for key, _ in _TAGS:
            if key in v:
                return key
        return None
    for key, model in _TAGS:
        if isinstance(v, model):
            return key
    return None


Operand = Annotated[
    Annotated[ColumnOperand, Tag("col")]
    | Annotated[ValueOperand, Tag("value")]
    | Annotated[ParamOperand, Tag("param")]
    | Annotated[FuncOperand, Tag("func")]
    | Annotated[CaseOperand, Tag("case")]
    | Annotated[PredicateOperand, Tag("pred")],
    Discriminator(_operand_discriminator),
]

# Resolve forward references in recursive types.
FuncOperand.model_rebuild()
CaseWhen.model_rebuild()
CaseBody.model_rebuild()
CaseOperand.model_rebuild()

#: Parse a raw dict into a typed Operand at any call site.
OPERAND_ADAPTER: TypeAdapter[Operand] = TypeAdapter(Operand)

_OPERAND_TYPES = tuple(model for _, model in _TAGS)


def to_operand(v: dict | Operand) -> Operand:
    """Convert a raw operand dict to a typed ``Operand``, or return as-is.

    Used by the predicate builder, which receives operands embedded inside
    raw predicate dicts.

    Args:
        v: A raw ``{"col": ...}`` / ``{"value": ...}`` dict, or an already-
           typed ``Operand`` instance.

    Returns:
        A typed ``Operand`` instance.
    """
    if isinstance(v, _OPERAND_TYPES):
        return v
    return OPERAND_ADAPTER.validate_python(v)
