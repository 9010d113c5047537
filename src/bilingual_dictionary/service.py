"""DictionaryService: main entry point for the bilingual-dictionary library."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from bilingual_dictionary.coordinator import MutationCoordinator
from bilingual_dictionary.db import Database
from bilingual_dictionary.fanout import FanOutFetcher, WordRef
from bilingual_dictionary.models import (
    ExampleModel,
    Language,
    TranslationModel,
    WordModel,
)
from bilingual_dictionary.repository import Repository

if TYPE_CHECKING:
    from bilingual_dictionary.config import DictionaryConfig


class DictionaryService:
    """Query and mutation API over one Polish-English dictionary store.

    The service owns the database handle: it is opened on construction
    and closed by :meth:`close` or on leaving a ``with`` block.
    """

    def __init__(
        self,
        db_path: str | Path = ":memory:",
        *,
        max_fetch_workers: int | None = None,
    ) -> None:
        self._db = Database(db_path)
        self.repository = Repository(self._db)
        self._fetcher = FanOutFetcher(self.repository, max_workers=max_fetch_workers)
        self._coordinator = MutationCoordinator(self.repository)

    @classmethod
    def from_config(cls, config: DictionaryConfig) -> DictionaryService:
        return cls(config.database, max_fetch_workers=config.max_fetch_workers)

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def __enter__(self) -> DictionaryService:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_words(self) -> list[WordModel]:
        return self.repository.list_words()

    def get_word(self, text: str) -> WordModel:
        return self.repository.find_word_by_text(text)

    def examples_for_word(self, word: WordRef) -> list[ExampleModel]:
        return self._fetcher.fetch_examples(word)

    def translations_for_word(self, word: WordRef) -> list[WordModel]:
        return self._fetcher.fetch_translations(word)

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def add_word(self, text: str, language: Language | str) -> WordModel:
        return self._coordinator.add_word(text, language)

    def update_word(
        self, old_text: str, language: Language | str, new_text: str
    ) -> WordModel:
        return self._coordinator.update_word(old_text, language, new_text)

    def delete_word(self, text: str, language: Language | str) -> bool:
        return self._coordinator.delete_word(text, language)

    # ------------------------------------------------------------------
    # Examples
    # ------------------------------------------------------------------

    def add_example(
        self, word: str, language: Language | str, example: str
    ) -> ExampleModel:
        return self._coordinator.add_example(word, language, example)

    def update_example(self, example_id: int, example: str) -> ExampleModel:
        return self._coordinator.update_example(example_id, example)

    def delete_example(self, example_id: int) -> bool:
        return self._coordinator.delete_example(example_id)

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def add_translation(self, word_pl: str, word_en: str) -> TranslationModel:
        return self._coordinator.add_translation(word_pl, word_en)

    def update_translation(
        self,
        old_word_pl: str,
        old_word_en: str,
        new_word_pl: str,
        new_word_en: str,
    ) -> TranslationModel:
        return self._coordinator.update_translation(
            old_word_pl, old_word_en, new_word_pl, new_word_en
        )

    def delete_translation(self, word_pl: str, word_en: str) -> bool:
        return self._coordinator.delete_translation(word_pl, word_en)
