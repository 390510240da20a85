"""Locale-aware translation joins on a QueryPlan.

``I18nJoinPlanner`` attaches joins to a ``<prefix>_i18n`` translation table
and derives localized output columns:

* ``<prefix_>IS_TRANSLATED``: whether a translation exists in the requested
  locale;
* ``<prefix_>i18n_<COLUMN>``: the localized value of each translatable column.

In the back office the requested locale's value is always shown as is (NULL
when untranslated).  On the front end, the ``default_lang_without_translation``
setting decides between hiding untranslated rows and substituting the default
language's text::

    planner = I18nJoinPlanner(languages, I18nConfig.from_env())
    plan = QueryPlan.for_table("product")
    locale = planner.get_i18n(
        Context.FRONTEND, None, plan, "fr_FR", ["TITLE", "DESCRIPTION"]
    )
    compiled = QueryBuilder(SQLiteCompiler()).build(plan)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from i18nql.config import I18nConfig, parse_fallback_policy
from i18nql.errors import LanguageNotFoundError
from i18nql.locale.models import (
    DEFAULT_I18N_COLUMNS,
    I18N_ID_COLUMN,
    I18N_LOCALE_COLUMN,
    Context,
    FallbackPolicy,
    ResolvedJoinSpec,
    TranslationJoinSpec,
)
from i18nql.locale.repository import LanguageIdentifier, LanguageRepository
from i18nql.schema.expressions import col, eq, is_not_null
from i18nql.schema.query_plan import JoinClause, JoinType, QueryPlan

logger = logging.getLogger(__name__)


class I18nJoinPlanner:
    """Adds i18n joins and localized columns to query plans.

    Args:
        languages: Resolves explicit language identifiers and provides the
            default language.
        config: i18n settings; the fallback policy is read once per call.
    """

    def __init__(
        self,
        languages: LanguageRepository,
        config: I18nConfig | None = None,
    ) -> None:
        self._languages = languages
        self._config = config or I18nConfig()

    @property
    def config(self) -> I18nConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_i18n(
        self,
        context: Context | bool | str,
        requested_lang: LanguageIdentifier | None,
        plan: QueryPlan,
        current_locale: str,
        column_names: Sequence[str],
        foreign_prefix: str | None = None,
        local_join_key: str = I18N_ID_COLUMN,
        force_return: bool = False,
        local_table: str | None = None,
    ) -> str:
        """Resolve the requested locale and add i18n joins to ``plan``.

        Args:
            context: ``Context.BACKEND`` / ``Context.FRONTEND``, a bool that
                is true for the back office, or ``"backend"`` / ``"frontend"``.
            requested_lang: Numeric language id or locale code; ``None`` uses
                ``current_locale``.
            plan: Plan to mutate in place.
            current_locale: Ambient locale code.
            column_names: Translatable columns.  Empty means nothing is added.
            foreign_prefix: Translation table name without ``_i18n``; defaults
                to the plan's base table, with unprefixed output names.
            local_join_key: Local column matched against the translation ``ID``.
            force_return: Front end only: keep rows that have no translation.
            local_table: Table to join from; defaults to the plan's base table.

        Returns:
            The locale code the plan was localized for.

        Raises:
            LanguageNotFoundError: If ``requested_lang`` names no language.
                ``plan`` is left untouched.
            TypeError: If ``context`` is not a Context, bool or string.
        """
        context = Context.coerce(context)
        locale = self.resolve_locale(requested_lang, current_locale)
        spec = TranslationJoinSpec(
            column_names=tuple(column_names),
            foreign_prefix=foreign_prefix,
            local_join_key=local_join_key,
            local_table=local_table,
        )
        self._plan(context, plan, locale, spec, force_return and context is Context.FRONTEND)
        return locale

    def resolve_locale(
        self,
        requested_lang: LanguageIdentifier | None,
        current_locale: str,
    ) -> str:
        """Return the locale code for ``requested_lang``, or ``current_locale``.

        Raises:
            LanguageNotFoundError: If ``requested_lang`` names no language.
        """
        if requested_lang is None:
            return current_locale
        language = self._languages.find_by_id_or_locale(requested_lang)
        if language is None:
            raise LanguageNotFoundError(requested_lang)
        return language.locale

    def plan_backend(
        self,
        plan: QueryPlan,
        locale: str,
        column_names: Sequence[str] = DEFAULT_I18N_COLUMNS,
        foreign_prefix: str | None = None,
        local_join_key: str = I18N_ID_COLUMN,
        local_table: str | None = None,
    ) -> None:
        """Add back-office i18n joins for an already resolved ``locale``."""
        spec = TranslationJoinSpec(tuple(column_names), foreign_prefix, local_join_key, local_table)
        self._plan(Context.BACKEND, plan, locale, spec, force_return=False)

    def plan_frontend(
        self,
        plan: QueryPlan,
        locale: str,
        column_names: Sequence[str] = DEFAULT_I18N_COLUMNS,
        foreign_prefix: str | None = None,
        local_join_key: str = I18N_ID_COLUMN,
        force_return: bool = False,
        local_table: str | None = None,
    ) -> None:
        """Add front-end i18n joins for an already resolved ``locale``."""
        spec = TranslationJoinSpec(tuple(column_names), foreign_prefix, local_join_key, local_table)
        self._plan(Context.FRONTEND, plan, locale, spec, force_return=force_return)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def _plan(
        self,
        context: Context,
        plan: QueryPlan,
        locale: str,
        spec: TranslationJoinSpec,
        force_return: bool,
    ) -> None:
        if not spec.column_names:
            return

        joins = spec.resolve(plan.base_table_name, plan.base_qualifier)
        policy = parse_fallback_policy(self._config.default_lang_without_translation)
        strict = policy == FallbackPolicy.STRICTLY_USE_REQUESTED_LANGUAGE
        use_fallback = context is Context.FRONTEND and not strict

        # Looked up before the plan is touched so a failing lookup leaves it intact.
        default_locale = self._languages.get_default_language().locale if use_fallback else None

        logger.debug(
            "Localizing %s on %s for %s (%s, policy=%s, force_return=%s)",
            list(joins.column_names),
            joins.foreign_table,
            locale,
            context.value,
            policy.name,
            force_return,
        )

        if context is Context.FRONTEND and strict and not force_return:
            requested_type: JoinType = "INNER"
        else:
            requested_type = "LEFT"

        requested = joins.requested_alias
        self._add_locale_join(plan, joins, requested, requested_type, locale)
        plan.add_derived_column(
            {"pred": is_not_null(col(requested, I18N_ID_COLUMN))},
            joins.translated_flag,
        )

        if not use_fallback:
            for column_name in joins.column_names:
                plan.add_derived_column(col(requested, column_name), joins.output_column(column_name))
            return

        default = joins.default_alias
        self._add_locale_join(plan, joins, default, "LEFT", default_locale)

        if not force_return:
            plan.add_filter(is_not_null(col(requested, I18N_ID_COLUMN))).or_filter(
                is_not_null(col(default, I18N_ID_COLUMN))
            )

        for column_name in joins.column_names:
            plan.add_derived_column(
                {
                    "case": {
                        "when": [
                            {
                                "if": is_not_null(col(requested, I18N_ID_COLUMN)),
                                "then": col(requested, column_name),
                            }
                        ],
                        "else": col(default, column_name),
                    }
                },
                joins.output_column(column_name),
            )

    @staticmethod
    def _add_locale_join(
        plan: QueryPlan,
        joins: ResolvedJoinSpec,
        alias: str,
        join_type: JoinType,
        locale: str,
    ) -> None:
        """Join ``joins.foreign_table`` as ``alias``, restricted to ``locale``."""
        plan.add_join(
            JoinClause(
                table=joins.foreign_table,
                alias=alias,
                type=join_type,
                on=eq(
                    col(joins.local_table, joins.local_join_key),
                    col(alias, I18N_ID_COLUMN),
                ),
            )
        )
        plan.add_join_condition(alias, eq(col(alias, I18N_LOCALE_COLUMN), {"value": locale}))
        logger.debug("Added %s JOIN %s AS %s (locale %s)", join_type, joins.foreign_table, alias, locale)
