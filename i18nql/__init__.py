"""i18nQL – locale-aware translation joins for SQL query plans.

Public API
----------
``get_i18n``
    Resolve the requested locale and add ``<prefix>_i18n`` translation joins,
    an ``IS_TRANSLATED`` flag and fallback-aware ``i18n_<COLUMN>`` columns to a
    :class:`QueryPlan`.

``compile_plan``
    Render a :class:`QueryPlan` to parameterized SQL for a registered dialect.

Re-exported types
-----------------
``QueryPlan``, ``I18nJoinPlanner``, ``I18nConfig``, ``Language``,
``Context``, ``FallbackPolicy``, ``InMemoryLanguageRepository``,
``CompiledSQL``, and all error classes.

Example::

    languages = InMemoryLanguageRepository([
        Language(id=1, code="en", locale="en_US", by_default=True),
        Language(id=2, code="fr", locale="fr_FR"),
    ])
    plan = QueryPlan.for_table("product")
    locale = i18nql.get_i18n(
        languages, Context.FRONTEND, "fr", plan, "en_US", ["TITLE"],
        config=I18nConfig(
            default_lang_without_translation=FallbackPolicy.REPLACE_BY_DEFAULT_LANGUAGE
        ),
    )
    compiled = i18nql.compile_plan(plan, "sqlite")
    cursor.execute(compiled.sql, compiled.params)

The SQLAlchemy-backed language repository lives in
:mod:`i18nql.locale.database` and needs the ``sqlalchemy`` extra.
"""

from __future__ import annotations

from collections.abc import Sequence

from i18nql.compile import (
    CompiledSQL,
    CompilerFactory,
    MySQLCompiler,
    PostgresCompiler,
    QueryBuilder,
    SQLCompiler,
    SQLiteCompiler,
)
from i18nql.config import I18nConfig
from i18nql.errors import (
    CompilationError,
    ConfigError,
    I18nQLError,
    LanguageNotFoundError,
    NoDefaultLanguageError,
    PlanError,
)
from i18nql.locale.models import (
    DEFAULT_I18N_COLUMNS,
    Context,
    FallbackPolicy,
    Language,
    TranslationJoinSpec,
)
from i18nql.locale.repository import InMemoryLanguageRepository, LanguageRepository
from i18nql.planner import I18nJoinPlanner
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
    # Core pipeline
    "get_i18n",
    "compile_plan",
    "I18nJoinPlanner",
    # Configuration
    "I18nConfig",
    # Locale types
    "DEFAULT_I18N_COLUMNS",
    "Context",
    "FallbackPolicy",
    "Language",
    "TranslationJoinSpec",
    "LanguageRepository",
    "InMemoryLanguageRepository",
    # Query plan
    "QueryPlan",
    "FromClause",
    "SelectItem",
    "JoinClause",
    "DerivedColumn",
    "OrderByItem",
    "LimitClause",
    # Compilation
    "CompiledSQL",
    "CompilerFactory",
    "QueryBuilder",
    "SQLCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    # Errors
    "I18nQLError",
    "LanguageNotFoundError",
    "NoDefaultLanguageError",
    "ConfigError",
    "PlanError",
    "CompilationError",
]


def get_i18n(
    languages: LanguageRepository,
    context: Context | bool | str,
    requested_lang: int | str | None,
    plan: QueryPlan,
    current_locale: str,
    column_names: Sequence[str],
    foreign_prefix: str | None = None,
    local_join_key: str = "ID",
    force_return: bool = False,
    local_table: str | None = None,
    config: I18nConfig | None = None,
) -> str:
    """Add i18n joins to ``plan`` and return the locale it was localized for.

    Thin wrapper building an :class:`I18nJoinPlanner` for a single call; see
    :meth:`I18nJoinPlanner.get_i18n` for the arguments.

    Raises:
        LanguageNotFoundError: If ``requested_lang`` names no language.
    """
    planner = I18nJoinPlanner(languages, config)
    return planner.get_i18n(
        context,
        requested_lang,
        plan,
        current_locale,
        column_names,
        foreign_prefix=foreign_prefix,
        local_join_key=local_join_key,
        force_return=force_return,
        local_table=local_table,
    )


def compile_plan(plan: QueryPlan, target: str = "sqlite") -> CompiledSQL:
    """Compile ``plan`` for the dialect registered as ``target``.

    Raises:
        CompilationError: If ``target`` is not registered.
    """
    compiler = CompilerFactory.create(target)
    return QueryBuilder(compiler).build(plan)
