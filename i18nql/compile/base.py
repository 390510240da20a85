"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern is used:
- ``SQLCompiler`` defines the dialect hooks the ``QueryBuilder`` relies on.
- ``SQLiteCompiler``, ``PostgresCompiler`` and ``MySQLCompiler`` override the
  dialect-specific steps (parameter placeholder style, identifier quoting).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful compilation.

    Attributes:
        sql: The compiled SQL string with named placeholders.
        params: Values for placeholders generated from ``{"value": ...}``
            operands (locale codes, for instance).  Does NOT include runtime
            params; those are supplied by the executor.
        dialect: The target dialect (``'sqlite'``, ``'postgres'`` or ``'mysql'``).
    """

    sql: str
    params: dict[str, Any]
    dialect: str

    def merge_runtime_params(
        self, runtime: dict[str, Any]
    ) -> dict[str, Any]:
        """Return a merged param dict ready for query execution.

        Args:
            runtime: Runtime parameter values supplied by the caller.

        Returns:
            A single dict combining compiled literal params and runtime params.
        """
        return {**self.params, **runtime}


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers."""

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name (e.g. ``'param_0'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table, alias or column name).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""

    def like_operator(self) -> str:
        """Return the SQL keyword for a LIKE match."""
        return "LIKE"

    def build_func_call(
        self,
        func_name: str,
        args: list[Any],
        build_arg: Callable[[Any], str],
    ) -> str:
        """Render a function call; dialects override for non-portable names."""
        args_sql = ", ".join(build_arg(a) for a in args)
        return f"{func_name.upper()}({args_sql})"
