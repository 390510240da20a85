"""SQLAlchemy-backed language repository.

Reads languages from a ``lang`` table with SQLAlchemy Core.  Install the
optional dependency before using this module::

    pip install "i18nql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from i18nql.locale.database import SQLAlchemyLanguageRepository

    engine = create_engine("sqlite:///shop.db")
    languages = SQLAlchemyLanguageRepository(engine)
    languages.find_by_id_or_locale("fr_FR")
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table, select
from sqlalchemy.engine import Engine

from i18nql.errors import NoDefaultLanguageError
from i18nql.locale.models import Language
from i18nql.locale.repository import LanguageIdentifier, as_language_id

logger = logging.getLogger(__name__)


def lang_table(metadata: MetaData, name: str = "lang") -> Table:
    """Declare the language table on ``metadata``.

    Args:
        metadata: Metadata collection the table is attached to.
        name: Physical table name.

    Returns:
        The :class:`~sqlalchemy.schema.Table`.
    """
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column("code", String(10), nullable=False),
        Column("locale", String(45), nullable=False),
        Column("title", String(100), nullable=False, default=""),
        Column("by_default", Boolean, nullable=False, default=False),
    )


class SQLAlchemyLanguageRepository:
    """A :class:`~i18nql.locale.repository.LanguageRepository` over a table.

    Every lookup opens its own connection from ``engine``; nothing is cached.

    Args:
        engine: Engine connected to the shop database.
        table_name: Name of the language table.
    """

    def __init__(self, engine: Engine, table_name: str = "lang") -> None:
        self._engine = engine
        self._table = lang_table(MetaData(), table_name)

    @property
    def table(self) -> Table:
        return self._table

    def create_table(self) -> None:
        """Create the language table if it does not exist."""
        self._table.metadata.create_all(self._engine, tables=[self._table])

    def add(self, language: Language) -> None:
        """Insert ``language``."""
        with self._engine.begin() as conn:
            conn.execute(self._table.insert().values(**language.model_dump()))

    def find_by_id_or_locale(self, identifier: LanguageIdentifier) -> Language | None:
        t = self._table
        lang_id = as_language_id(identifier)
        if lang_id is not None:
            stmt = select(t).where(t.c.id == lang_id)
        else:
            # A locale match wins over a code match.
            stmt = (
                select(t)
                .where((t.c.locale == identifier) | (t.c.code == identifier))
                .order_by((t.c.locale == identifier).desc(), t.c.id)
            )
        logger.debug("Looking up language %r in table %s", identifier, t.name)
        with self._engine.connect() as conn:
            row = conn.execute(stmt.limit(1)).mappings().first()
        return _to_language(row) if row is not None else None

    def get_default_language(self) -> Language:
        t = self._table
        stmt = (
            select(t)
            .order_by(t.c.by_default.desc(), t.c.id)
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NoDefaultLanguageError(f"table '{t.name}'")
        return _to_language(row)


def _to_language(row: Any) -> Language:
    return Language(
        id=row["id"],
        code=row["code"],
        locale=row["locale"],
        title=row["title"] or "",
        by_default=bool(row["by_default"]),
    )
