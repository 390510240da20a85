"""Locale domain types: languages, planning contexts and translation joins."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict

#: Suffix of every translation table (``product`` -> ``product_i18n``).
I18N_TABLE_SUFFIX = "_i18n"

#: Primary key column of translation tables, matched by the local join key.
I18N_ID_COLUMN = "ID"

#: Locale column of translation tables.
I18N_LOCALE_COLUMN = "LOCALE"

#: Translatable columns shared by most catalog tables.
DEFAULT_I18N_COLUMNS: tuple[str, ...] = ("TITLE", "CHAPO", "DESCRIPTION", "POSTSCRIPTUM")


class Language(BaseModel):
    """A language known to the application.

    Attributes:
        id: Numeric identifier.
        code: Short language code (e.g. ``'en'``).
        locale: Locale code (e.g. ``'en_US'``).
        title: Display name.
        by_default: Whether this is the shop-wide default language.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    code: str
    locale: str
    title: str = ""
    by_default: bool = False


class Context(Enum):
    """Where a localized query is rendered."""

    BACKEND = "backend"
    FRONTEND = "frontend"

    @classmethod
    def from_flag(cls, backend: bool) -> Context:
        return cls.BACKEND if backend else cls.FRONTEND

    @classmethod
    def coerce(cls, value: Context | bool | str) -> Context:
        """Accept a member, a back-office flag or a value such as ``"frontend"``.

        Raises:
            TypeError: For any other type.
            ValueError: For a string that names no context.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.from_flag(value)
        if isinstance(value, str):
            return cls(value.lower())
        raise TypeError(
            f"context must be a Context, a bool or a string, not {type(value).__name__}"
        )


class FallbackPolicy(IntEnum):
    """Front-end behaviour when no translation exists in the requested locale.

    Values match the stored ``default_lang_without_translation`` setting.
    """

    STRICTLY_USE_REQUESTED_LANGUAGE = 0
    REPLACE_BY_DEFAULT_LANGUAGE = 1


@dataclass(frozen=True)
class TranslationJoinSpec:
    """Where translations live relative to a local table.

    Attributes:
        column_names: Translatable columns, in output order.
        foreign_prefix: Translation table name without the ``_i18n`` suffix.
            ``None`` means "the base table of the plan", in which case output
            column names carry no prefix.
        local_join_key: Column of the local table matched against ``ID``.
        local_table: Table (or alias) to join from; ``None`` means the base
            table of the plan.
    """

    column_names: Sequence[str]
    foreign_prefix: str | None = None
    local_join_key: str = I18N_ID_COLUMN
    local_table: str | None = None

    @property
    def alias_prefix(self) -> str:
        """Prefix for join aliases and output column names."""
        return "" if self.foreign_prefix is None else f"{self.foreign_prefix}_"

    def resolve(self, base_table: str, base_qualifier: str | None = None) -> ResolvedJoinSpec:
        """Fill in table defaults from the plan's base table.

        Aliases and output names keep the caller's prefix: when
        ``foreign_prefix`` was absent they stay unprefixed even though the
        translation table becomes ``<base_table>_i18n``.
        """
        return ResolvedJoinSpec(
            column_names=tuple(self.column_names),
            foreign_prefix=base_table if self.foreign_prefix is None else self.foreign_prefix,
            local_join_key=self.local_join_key,
            local_table=self.local_table or base_qualifier or base_table,
            output_prefix=self.alias_prefix,
        )


@dataclass(frozen=True)
class ResolvedJoinSpec(TranslationJoinSpec):
    """A :class:`TranslationJoinSpec` with every table name known."""

    output_prefix: str = ""

    @property
    def alias_prefix(self) -> str:
        return self.output_prefix

    @property
    def foreign_table(self) -> str:
        """Translation table name: ``<prefix>_i18n``."""
        return f"{self.foreign_prefix}{I18N_TABLE_SUFFIX}"

    @property
    def requested_alias(self) -> str:
        return f"{self.alias_prefix}requested_locale_i18n"

    @property
    def default_alias(self) -> str:
        return f"{self.alias_prefix}default_locale_i18n"

    @property
    def translated_flag(self) -> str:
        return f"{self.alias_prefix}IS_TRANSLATED"

    def output_column(self, column_name: str) -> str:
        """Output alias of the localized value of ``column_name``."""
        return f"{self.alias_prefix}i18n_{column_name}"
