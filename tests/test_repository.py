"""Unit tests for the language repositories."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine

from i18nql.errors import NoDefaultLanguageError
from i18nql.locale.database import SQLAlchemyLanguageRepository
from i18nql.locale.models import Language
from i18nql.locale.repository import (
    InMemoryLanguageRepository,
    LanguageRepository,
    as_language_id,
)
from tests.fixtures import LANGUAGES


def _make_engine() -> Engine:
    """Return an in-memory SQLite engine."""
    return create_engine("sqlite:///:memory:")


@pytest.fixture()
def sql_languages() -> SQLAlchemyLanguageRepository:
    repo = SQLAlchemyLanguageRepository(_make_engine())
    repo.create_table()
    for language in LANGUAGES:
        repo.add(language)
    return repo


@pytest.fixture(params=["memory", "sqlalchemy"])
def repo(request, languages, sql_languages) -> LanguageRepository:
    return languages if request.param == "memory" else sql_languages


@pytest.mark.parametrize(
    "identifier, expected_id",
    [(1, 1), (3, 3), ("2", 2), ("fr_FR", 2), ("de", 3), ("en_US", 1)],
)
def test_find_by_id_or_locale(repo, identifier, expected_id):
    language = repo.find_by_id_or_locale(identifier)
    assert language is not None
    assert language.id == expected_id


@pytest.mark.parametrize("identifier", [99, "99", "xx_XX", "nonexistent"])
def test_find_unknown_returns_none(repo, identifier):
    assert repo.find_by_id_or_locale(identifier) is None


def test_default_language(repo):
    default = repo.get_default_language()
    assert default.locale == "en_US"
    assert default.by_default is True


def test_repositories_satisfy_protocol(languages, sql_languages):
    assert isinstance(languages, LanguageRepository)
    assert isinstance(sql_languages, LanguageRepository)


def test_locale_match_wins_over_code_match():
    # Language 1's code collides with language 2's locale.
    langs = [
        Language(id=1, code="pt_BR", locale="pt_PT"),
        Language(id=2, code="br", locale="pt_BR"),
    ]
    memory = InMemoryLanguageRepository(langs)
    sql = SQLAlchemyLanguageRepository(_make_engine())
    sql.create_table()
    for language in langs:
        sql.add(language)
    assert memory.find_by_id_or_locale("pt_BR").id == 2
    assert sql.find_by_id_or_locale("pt_BR").id == 2


def test_default_falls_back_to_first_language():
    langs = [Language(id=5, code="it", locale="it_IT"), Language(id=6, code="es", locale="es_ES")]
    assert InMemoryLanguageRepository(langs).get_default_language().id == 5

    sql = SQLAlchemyLanguageRepository(_make_engine())
    sql.create_table()
    for language in reversed(langs):
        sql.add(language)
    assert sql.get_default_language().id == 5


def test_empty_repositories_have_no_default():
    with pytest.raises(NoDefaultLanguageError):
        InMemoryLanguageRepository([]).get_default_language()

    sql = SQLAlchemyLanguageRepository(_make_engine(), table_name="languages")
    sql.create_table()
    with pytest.raises(NoDefaultLanguageError) as exc_info:
        sql.get_default_language()
    assert "languages" in str(exc_info.value)


def test_create_table_uses_custom_name():
    engine = _make_engine()
    repo = SQLAlchemyLanguageRepository(engine, table_name="shop_lang")
    repo.create_table()
    assert repo.table.name == "shop_lang"
    assert "shop_lang" in inspect(engine).get_table_names()


def test_in_memory_languages_is_a_copy(languages):
    snapshot = languages.languages
    snapshot.clear()
    assert len(languages.languages) == len(LANGUAGES)



@pytest.mark.parametrize(
    "identifier, expected",
    [(4, 4), ("12", 12), ("en_US", None), (True, None), ("", None)],
)
def test_as_language_id(identifier, expected):
    assert as_language_id(identifier) == expected
