"""PostgreSQL dialect compiler."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from i18nql.compile.base import SQLCompiler


class PostgresCompiler(SQLCompiler):
    """Compiles QueryPlan to PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``psycopg2`` and
    ``psycopg`` named-parameter execution.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def build_func_call(
        self,
        func_name: str,
        args: list[Any],
        build_arg: Callable[[Any], str],
    ) -> str:
        # PostgreSQL has no IFNULL; COALESCE is the portable spelling.
        if func_name.upper() == "IFNULL":
            func_name = "COALESCE"
        return super().build_func_call(func_name, args, build_arg)
