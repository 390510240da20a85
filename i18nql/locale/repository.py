"""Language lookup contracts and an in-memory implementation.

The planner only needs two questions answered: "which language does this
identifier name?" and "which language is the default?".  Any object
implementing :class:`LanguageRepository` can answer them;
:class:`InMemoryLanguageRepository` serves tests and applications that load
their language list at startup, and
:class:`~i18nql.locale.database.SQLAlchemyLanguageRepository` reads a
``lang`` table.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from i18nql.errors import NoDefaultLanguageError
from i18nql.locale.models import Language

#: Identifier accepted by :meth:`LanguageRepository.find_by_id_or_locale`.
LanguageIdentifier = int | str


@runtime_checkable
class LanguageRepository(Protocol):
    """Resolves language identifiers and provides the default language."""

    def find_by_id_or_locale(self, identifier: LanguageIdentifier) -> Language | None:
        """Return the language with this numeric id or locale code, if any."""
        ...

    def get_default_language(self) -> Language:
        """Return the default language.

        Raises:
            NoDefaultLanguageError: If no language is defined.
        """
        ...


def as_language_id(identifier: LanguageIdentifier) -> int | None:
    """Return ``identifier`` as a numeric id, or ``None`` if it is a code.

    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return identifier
    if isinstance(identifier, str) and identifier.isdigit():
        return int(identifier)
    return None


def pick_default(languages: Iterable[Language]) -> Language | None:
    """Return the language flagged ``by_default``, else the first one."""
    first: Language | None = None
    for language in languages:
        if language.by_default:
            return language
        if first is None:
            first = language
    return first


class InMemoryLanguageRepository:
    """A :class:`LanguageRepository` over a fixed list of languages.

    Args:
        languages: Known languages, in preference order.
    """

    def __init__(self, languages: Iterable[Language]) -> None:
        self._languages: list[Language] = list(languages)

    @property
    def languages(self) -> list[Language]:
        return list(self._languages)

    def find_by_id_or_locale(self, identifier: LanguageIdentifier) -> Language | None:
        lang_id = as_language_id(identifier)
        if lang_id is not None:
            return next((lang for lang in self._languages if lang.id == lang_id), None)
        for attr in ("locale", "code"):
            for language in self._languages:
                if getattr(language, attr) == identifier:
                    return language
        return None

    def get_default_language(self) -> Language:
        default = pick_default(self._languages)
        if default is None:
            raise NoDefaultLanguageError("in-memory language list")
        return default
