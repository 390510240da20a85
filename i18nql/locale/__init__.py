"""Locale types and language repositories."""
from i18nql.locale.models import (
    DEFAULT_I18N_COLUMNS,
    Context,
    FallbackPolicy,
    Language,
    ResolvedJoinSpec,
    TranslationJoinSpec,
)
from i18nql.locale.repository import InMemoryLanguageRepository, LanguageRepository

__all__ = [
    "DEFAULT_I18N_COLUMNS",
    "Context",
    "FallbackPolicy",
    "Language",
    "ResolvedJoinSpec",
    "TranslationJoinSpec",
    "InMemoryLanguageRepository",
    "LanguageRepository",
]
