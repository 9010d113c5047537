"""Concurrent fetching of a word's related rows.

A fetch resolves the parent word, reads the ids of its related rows with
one query, then looks each id up on its own worker thread. The call
returns only after every worker has finished: either the full
collection, or a single :class:`AggregateFetchError` when any lookup
failed. Partial results are never returned.

Result order follows worker completion and is not guaranteed to match
the id order.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence, Union

from bilingual_dictionary.exceptions import (
    AggregateFetchError,
    UnsupportedLanguageError,
    ValidationError,
)
from bilingual_dictionary.models import (
    SUPPORTED_LANGUAGES,
    ChildKind,
    Entity,
    EntityKind,
    ExampleModel,
    Language,
    WordModel,
)
from bilingual_dictionary.repository import Repository

logger = logging.getLogger(__name__)

WordRef = Union[str, WordModel]


class _Collector:
    """Results and failure flag shared by the workers of one fetch."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[Entity] = []
        self._failed = False

    def add(self, item: Entity) -> None:
        with self._lock:
            self._items.append(item)

    def fail(self) -> None:
        with self._lock:
            self._failed = True

    @property
    def failed(self) -> bool:
        with self._lock:
            return self._failed

    def items(self) -> list[Entity]:
        with self._lock:
            return list(self._items)


class FanOutFetcher:
    """Fetch the examples or translations of a word in parallel.

    Args:
        repository: Store used for every lookup.
        max_workers: Upper bound on worker threads per fetch. ``None``
            starts one worker per related row.
    """

    def __init__(self, repository: Repository, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValidationError(f"max_workers must be positive: {max_workers!r}")
        self._repo = repository
        self._max_workers = max_workers

    def fetch_examples(self, word: WordRef) -> list[ExampleModel]:
        """Example sentences attached to *word* (text or resolved model)."""
        parent = self._resolve(word)
        return self.fetch_children(parent, ChildKind.EXAMPLES)

    def fetch_translations(self, word: WordRef) -> list[WordModel]:
        """Words in the other language linked to *word*.

        Raises:
            UnsupportedLanguageError: The word's language is not one of
                the supported tags. Nothing else is queried.
        """
        parent = self._resolve(word)
        if parent.language not in SUPPORTED_LANGUAGES:
            raise UnsupportedLanguageError(parent.language)
        kind = ChildKind.translations_of(Language(parent.language))
        return self.fetch_children(parent, kind)

    def fetch_children(self, parent: WordModel, kind: ChildKind) -> list[Entity]:
        ids = self._repo.list_child_ids(parent.id, kind)
        if not ids:
            return []
        logger.debug(
            f"Fetching {len(ids)} {kind.value} of word {parent.id} ({parent.text!r})"
        )
        return self.fetch_all(kind.entity_kind, ids)

    def fetch_all(self, kind: EntityKind, ids: Sequence[int]) -> list[Entity]:
        """Look up every id concurrently; all-or-nothing."""
        if not ids:
            return []
        collector = _Collector()
        workers = len(ids)
        if self._max_workers is not None:
            workers = min(workers, self._max_workers)

        # Leaving the block waits for, and joins, every worker thread
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="fanout"
        ) as executor:
            for id in ids:
                executor.submit(self._fetch_one, kind, id, collector)

        if collector.failed:
            raise AggregateFetchError(
                f"One or more {kind.value} rows could not be fetched"
            )
        return collector.items()

    def _fetch_one(self, kind: EntityKind, id: int, collector: _Collector) -> None:
        try:
            item = self._repo.get_by_id(kind, id)
        except Exception as e:
            logger.warning(f"Failed to fetch {kind.value} {id}: {e}")
            collector.fail()
        else:
            collector.add(item)

    def _resolve(self, word: WordRef) -> WordModel:
        if isinstance(word, WordModel):
            return word
        return self._repo.find_word_by_text(word)
