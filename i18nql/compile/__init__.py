"""i18nQL compilation layer: QueryPlan → parameterized SQL."""
from i18nql.compile.base import CompiledSQL, SQLCompiler
from i18nql.compile.builder import QueryBuilder
from i18nql.compile.mysql import MySQLCompiler
from i18nql.compile.postgres import PostgresCompiler
from i18nql.compile.registry import CompilerFactory
from i18nql.compile.sqlite import SQLiteCompiler

CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    "CompiledSQL",
    "SQLCompiler",
    "QueryBuilder",
    "CompilerFactory",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
]
