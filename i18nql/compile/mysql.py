"""MySQL dialect compiler."""

from __future__ import annotations

from i18nql.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Compiles QueryPlan to MySQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes,
    matching the quoting of translation aliases such as
    `` `requested_locale_i18n`.`TITLE` ``.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
