"""Create, update, and delete operations safe under concurrent callers.

Creation follows one policy for every entity: look the natural key up,
insert when absent, and when the insert loses a race to another caller
(uniqueness violation) return the row that caller stored. Any number of
identical concurrent adds therefore leave exactly one row behind.

Updates and deletes look the row up, then write by id. Concurrent writes
to one row are last-committer-wins; there is no optimistic locking. A
write whose row disappeared in between raises
:class:`EntityNotFoundError` and never recreates it.
"""

from __future__ import annotations

import dataclasses
import logging
from contextlib import suppress
from typing import Any

from bilingual_dictionary.exceptions import (
    ConstraintViolationError,
    EntityNotFoundError,
    ValidationError,
)
from bilingual_dictionary.models import (
    Entity,
    EntityKind,
    ExampleModel,
    Language,
    TranslationModel,
    WordModel,
)
from bilingual_dictionary.repository import Repository

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value


def _language_value(language: Language | str) -> str:
    return language.value if isinstance(language, Language) else language


class MutationCoordinator:
    """All add/update/delete operations of the dictionary."""

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def add_word(self, text: str, language: Language | str) -> WordModel:
        """Return the word (*text*, *language*), creating it if needed.

        An unsupported language is rejected by the store's check
        constraint and surfaces as :class:`ConstraintViolationError`.
        """
        _require_text(text, "word")
        lang = _language_value(language)
        return self._find_or_create(
            EntityKind.WORD,
            WordModel(id=None, text=text, language=lang),
            text=text, language=lang,
        )

    def update_word(
        self, old_text: str, language: Language | str, new_text: str
    ) -> WordModel:
        _require_text(new_text, "new word")
        word = self._repo.find_word_by_text_and_language(
            old_text, _language_value(language)
        )
        return self._repo.update(dataclasses.replace(word, text=new_text))

    def delete_word(self, text: str, language: Language | str) -> bool:
        """Delete a word together with its translations and examples."""
        word = self._repo.find_word_by_text_and_language(
            text, _language_value(language)
        )
        return self._repo.delete(EntityKind.WORD, word.id)

    # ------------------------------------------------------------------
    # Examples
    # ------------------------------------------------------------------

    def add_example(
        self, word_text: str, language: Language | str, example_text: str
    ) -> ExampleModel:
        _require_text(example_text, "example")
        word = self._repo.find_word_by_text_and_language(
            word_text, _language_value(language)
        )
        return self._find_or_create(
            EntityKind.EXAMPLE,
            ExampleModel(id=None, word_id=word.id, text=example_text),
            word_id=word.id, text=example_text,
        )

    def update_example(self, example_id: int, new_text: str) -> ExampleModel:
        _require_text(new_text, "example")
        example = self._repo.get_by_id(EntityKind.EXAMPLE, example_id)
        return self._repo.update(dataclasses.replace(example, text=new_text))

    def delete_example(self, example_id: int) -> bool:
        return self._repo.delete(EntityKind.EXAMPLE, example_id)

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def add_translation(self, word_pl: str, word_en: str) -> TranslationModel:
        pl, en = self._word_pair(word_pl, word_en)
        return self._find_or_create(
            EntityKind.TRANSLATION,
            TranslationModel(id=None, word_id_pl=pl.id, word_id_en=en.id),
            word_id_pl=pl.id, word_id_en=en.id,
        )

    def update_translation(
        self,
        old_word_pl: str,
        old_word_en: str,
        new_word_pl: str,
        new_word_en: str,
    ) -> TranslationModel:
        """Re-point the translation (old_pl, old_en) at (new_pl, new_en)."""
        old_pl, old_en = self._word_pair(old_word_pl, old_word_en)
        translation = self._repo.find_one(
            EntityKind.TRANSLATION, word_id_pl=old_pl.id, word_id_en=old_en.id
        )
        new_pl, new_en = self._word_pair(new_word_pl, new_word_en)
        return self._repo.update(
            dataclasses.replace(
                translation, word_id_pl=new_pl.id, word_id_en=new_en.id
            )
        )

    def delete_translation(self, word_pl: str, word_en: str) -> bool:
        """Remove the translation between two words.

        Both words must exist; a pair that is not linked (or was unlinked
        by a concurrent caller) still counts as deleted.
        """
        pl, en = self._word_pair(word_pl, word_en)
        for translation in self._repo.find_many(
            EntityKind.TRANSLATION, word_id_pl=pl.id, word_id_en=en.id
        ):
            with suppress(EntityNotFoundError):
                self._repo.delete(EntityKind.TRANSLATION, translation.id)
        return True

    def _word_pair(self, word_pl: str, word_en: str) -> tuple[WordModel, WordModel]:
        pl = self._repo.find_word_by_text_and_language(word_pl, Language.POLISH)
        en = self._repo.find_word_by_text_and_language(word_en, Language.ENGLISH)
        return pl, en

    # ------------------------------------------------------------------
    # Find-or-return
    # ------------------------------------------------------------------

    def _find_or_create(self, kind: EntityKind, entity: Entity, **key: Any) -> Entity:
        with suppress(EntityNotFoundError):
            return self._repo.find_one(kind, **key)
        try:
            return self._repo.create(entity)
        except ConstraintViolationError:
            existing = self._repo.find_many(kind, **key)
            if not existing:
                raise
            logger.debug(f"Concurrent add of {kind.value} {key!r} converged on id {existing[0].id}")
            return existing[0]
