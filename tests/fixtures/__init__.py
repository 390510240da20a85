"""Test fixtures: sample catalog DDL, languages and translations."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Literal

from i18nql.locale.models import Language

_FIXTURES_DIR = Path(__file__).parent

LANGUAGES: list[Language] = [
    Language(id=1, code="en", locale="en_US", title="English", by_default=True),
    Language(id=2, code="fr", locale="fr_FR", title="Français"),
    Language(id=3, code="de", locale="de_DE", title="Deutsch"),
]

#: (ID, REF, VISIBLE, BRAND_ID)
PRODUCTS = [
    (1, "P1", 1, 1),   # translated in en_US and fr_FR
    (2, "P2", 1, 1),   # en_US only
    (3, "P3", 1, None),  # fr_FR only
    (4, "P4", 0, None),  # no translation at all
]

#: (ID, LOCALE, TITLE, CHAPO, DESCRIPTION, POSTSCRIPTUM)
PRODUCT_I18N = [
    (1, "en_US", "Chair", "A chair", "Wooden chair", None),
    (1, "fr_FR", "Chaise", "Une chaise", "Chaise en bois", None),
    (2, "en_US", "Table", "A table", "Oak table", "Assembly required"),
    (3, "fr_FR", "Lampe", "Une lampe", "Lampe de bureau", None),
]

BRANDS = [(1, 1)]

#: (ID, LOCALE, TITLE)
BRAND_I18N = [
    (1, "en_US", "Acme"),
]


def load_ddl(target: Literal["sqlite"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend."""
    return (_FIXTURES_DIR / f"ddl_{target}.sql").read_text()


def seed(conn: sqlite3.Connection) -> None:
    """Create the sample schema on ``conn`` and insert the sample rows."""
    conn.executescript(load_ddl("sqlite"))
    conn.executemany(
        "INSERT INTO lang VALUES (?,?,?,?,?)",
        [(l.id, l.code, l.locale, l.title, int(l.by_default)) for l in LANGUAGES],
    )
    conn.executemany("INSERT INTO product VALUES (?,?,?,?)", PRODUCTS)
    conn.executemany("INSERT INTO product_i18n VALUES (?,?,?,?,?,?)", PRODUCT_I18N)
    conn.executemany("INSERT INTO brand VALUES (?,?)", BRANDS)
    conn.executemany("INSERT INTO brand_i18n VALUES (?,?,?)", BRAND_I18N)
    conn.commit()
