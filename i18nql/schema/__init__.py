"""i18nQL schema models: QueryPlan and its typed operands."""
from i18nql.schema.operands import (
    CaseOperand,
    ColumnOperand,
    FuncOperand,
    Operand,
    ParamOperand,
    PredicateOperand,
    ValueOperand,
)
from i18nql.schema.query_plan import (
    DerivedColumn,
    FromClause,
    JoinClause,
    LimitClause,
    OrderByItem,
    QueryPlan,
    SelectItem,
)

__all__ = [
    "CaseOperand",
    "ColumnOperand",
    "FuncOperand",
    "Operand",
    "ParamOperand",
    "PredicateOperand",
    "ValueOperand",
    "DerivedColumn",
    "FromClause",
    "JoinClause",
    "LimitClause",
    "OrderByItem",
    "QueryPlan",
    "SelectItem",
]
