"""Data access for words, translations, and examples.

Every method is a single statement against the shared :class:`Database`
handle, so methods are safe to call from many threads at once but give
no atomicity across calls. Coordinating several calls is the job of
:mod:`bilingual_dictionary.coordinator`.
"""

from __future__ import annotations

import dataclasses
import sqlite3
from enum import Enum
from typing import Any, Callable, NamedTuple

from bilingual_dictionary.db import Database
from bilingual_dictionary.exceptions import (
    ConstraintViolationError,
    EntityNotFoundError,
    ValidationError,
)
from bilingual_dictionary.models import (
    ChildKind,
    Entity,
    EntityKind,
    ExampleModel,
    TranslationModel,
    WordModel,
)


class _Table(NamedTuple):
    name: str
    columns: tuple[str, ...]
    model: type
    from_row: Callable[[sqlite3.Row], Any]


_TABLES: dict[EntityKind, _Table] = {
    EntityKind.WORD: _Table(
        "words", ("text", "language"), WordModel,
        lambda r: WordModel(id=r["id"], text=r["text"], language=r["language"]),
    ),
    EntityKind.TRANSLATION: _Table(
        "translations", ("word_id_pl", "word_id_en"), TranslationModel,
        lambda r: TranslationModel(
            id=r["id"], word_id_pl=r["word_id_pl"], word_id_en=r["word_id_en"],
        ),
    ),
    EntityKind.EXAMPLE: _Table(
        "examples", ("word_id", "text"), ExampleModel,
        lambda r: ExampleModel(id=r["id"], word_id=r["word_id"], text=r["text"]),
    ),
}

# SELECT producing the child ids of one parent word
_CHILD_ID_SQL: dict[ChildKind, str] = {
    ChildKind.EXAMPLES:
        "SELECT id FROM examples WHERE word_id = ? ORDER BY id",
    ChildKind.ENGLISH_TRANSLATIONS:
        "SELECT word_id_en FROM translations WHERE word_id_pl = ? ORDER BY id",
    ChildKind.POLISH_TRANSLATIONS:
        "SELECT word_id_pl FROM translations WHERE word_id_en = ? ORDER BY id",
}


def _kind_of(entity: Entity) -> EntityKind:
    for kind, table in _TABLES.items():
        if isinstance(entity, table.model):
            return kind
    raise ValidationError(f"Not a storable entity: {entity!r}")


def _param(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class Repository:
    """Point lookups, filtered scans, and single-row writes."""

    def __init__(self, database: Database) -> None:
        self._db = database

    # ------------------------------------------------------------------
    # Word lookups
    # ------------------------------------------------------------------

    def find_word_by_text(self, text: str) -> WordModel:
        """Return the first word spelled *text* in any language."""
        row = self._db.query_one(
            "SELECT * FROM words WHERE text = ? ORDER BY id LIMIT 1",
            (text,),
        )
        if row is None:
            raise EntityNotFoundError(f"Word not found: {text!r}")
        return _TABLES[EntityKind.WORD].from_row(row)

    def find_word_by_text_and_language(self, text: str, language: str) -> WordModel:
        row = self._db.query_one(
            "SELECT * FROM words WHERE text = ? AND language = ?",
            (text, _param(language)),
        )
        if row is None:
            raise EntityNotFoundError(
                f"Word not found: {text!r} ({_param(language)})"
            )
        return _TABLES[EntityKind.WORD].from_row(row)

    def list_words(self) -> list[WordModel]:
        rows = self._db.query("SELECT * FROM words ORDER BY id")
        return [_TABLES[EntityKind.WORD].from_row(r) for r in rows]

    def list_child_ids(self, parent_id: int, kind: ChildKind) -> list[int]:
        """Ids of the rows related to word *parent_id* through *kind*."""
        rows = self._db.query(_CHILD_ID_SQL[kind], (parent_id,))
        return [r[0] for r in rows]

    # ------------------------------------------------------------------
    # Generic reads
    # ------------------------------------------------------------------

    def get_by_id(self, kind: EntityKind, id: int) -> Entity:
        table = _TABLES[kind]
        row = self._db.query_one(
            f"SELECT * FROM {table.name} WHERE id = ?", (id,)
        )
        if row is None:
            raise EntityNotFoundError(f"{kind.value.capitalize()} not found: {id!r}")
        return table.from_row(row)

    def find_one(self, kind: EntityKind, **criteria: Any) -> Entity:
        """Return the lowest-id row matching all *criteria*."""
        table = _TABLES[kind]
        where, params = self._where(table, criteria)
        row = self._db.query_one(
            f"SELECT * FROM {table.name} WHERE {where} ORDER BY id LIMIT 1",
            params,
        )
        if row is None:
            raise EntityNotFoundError(
                f"{kind.value.capitalize()} not found: {criteria!r}"
            )
        return table.from_row(row)

    def find_many(self, kind: EntityKind, **criteria: Any) -> list[Entity]:
        table = _TABLES[kind]
        where, params = self._where(table, criteria)
        rows = self._db.query(
            f"SELECT * FROM {table.name} WHERE {where} ORDER BY id", params
        )
        return [table.from_row(r) for r in rows]

    @staticmethod
    def _where(table: _Table, criteria: dict[str, Any]) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        for column, value in criteria.items():
            if column != "id" and column not in table.columns:
                raise ValidationError(
                    f"Unknown column for {table.name}: {column!r}"
                )
            clauses.append(f"{column} = ?")
            params.append(_param(value))
        where = " AND ".join(clauses) if clauses else "1=1"
        return where, params

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, entity: Entity) -> Entity:
        """Insert *entity* and return it with its assigned id."""
        table = _TABLES[_kind_of(entity)]
        values = [_param(getattr(entity, c)) for c in table.columns]
        placeholders = ", ".join("?" for _ in table.columns)
        try:
            cur = self._db.execute(
                f"INSERT INTO {table.name} ({', '.join(table.columns)}) "
                f"VALUES ({placeholders})",
                values,
            )
        except sqlite3.IntegrityError as e:
            raise ConstraintViolationError(
                f"Cannot create {table.name} row {entity!r}: {e}"
            ) from e
        return dataclasses.replace(entity, id=cur.lastrowid)

    def update(self, entity: Entity) -> Entity:
        """Overwrite every column of the row with *entity*'s id."""
        kind = _kind_of(entity)
        table = _TABLES[kind]
        assignments = ", ".join(f"{c} = ?" for c in table.columns)
        values = [_param(getattr(entity, c)) for c in table.columns]
        try:
            cur = self._db.execute(
                f"UPDATE {table.name} SET {assignments} WHERE id = ?",
                [*values, entity.id],
            )
        except sqlite3.IntegrityError as e:
            raise ConstraintViolationError(
                f"Cannot update {table.name} row {entity.id!r}: {e}"
            ) from e
        if cur.rowcount == 0:
            raise EntityNotFoundError(
                f"{kind.value.capitalize()} not found: {entity.id!r}"
            )
        return entity

    def delete(self, kind: EntityKind, id: int) -> bool:
        table = _TABLES[kind]
        cur = self._db.execute(f"DELETE FROM {table.name} WHERE id = ?", (id,))
        if cur.rowcount == 0:
            raise EntityNotFoundError(f"{kind.value.capitalize()} not found: {id!r}")
        return True
