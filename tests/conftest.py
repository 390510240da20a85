"""Shared pytest fixtures for i18nQL unit and integration tests."""
from __future__ import annotations

import pytest

from i18nql.config import I18nConfig
from i18nql.locale.models import FallbackPolicy
from i18nql.locale.repository import InMemoryLanguageRepository
from i18nql.planner import I18nJoinPlanner
from i18nql.schema.query_plan import QueryPlan
from tests.fixtures import LANGUAGES


@pytest.fixture()
def languages() -> InMemoryLanguageRepository:
    """English (default), French and German."""
    return InMemoryLanguageRepository(LANGUAGES)


@pytest.fixture()
def strict_planner(languages: InMemoryLanguageRepository) -> I18nJoinPlanner:
    return I18nJoinPlanner(
        languages,
        I18nConfig(default_lang_without_translation=FallbackPolicy.STRICTLY_USE_REQUESTED_LANGUAGE),
    )


@pytest.fixture()
def fallback_planner(languages: InMemoryLanguageRepository) -> I18nJoinPlanner:
    return I18nJoinPlanner(
        languages,
        I18nConfig(default_lang_without_translation=FallbackPolicy.REPLACE_BY_DEFAULT_LANGUAGE),
    )


@pytest.fixture()
def plan() -> QueryPlan:
    """An empty plan over the ``product`` table."""
    return QueryPlan.for_table("product")
