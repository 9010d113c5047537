"""Domain model dataclasses and enums for bilingual-dictionary."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Language(str, Enum):
    """Language tags a word may carry."""

    POLISH = "pl"
    ENGLISH = "en"

    @property
    def opposite(self) -> Language:
        return Language.ENGLISH if self is Language.POLISH else Language.POLISH


SUPPORTED_LANGUAGES = frozenset(lang.value for lang in Language)


class EntityKind(str, Enum):
    """Stored entity kinds, used to address repository operations."""

    WORD = "word"
    TRANSLATION = "translation"
    EXAMPLE = "example"


class ChildKind(str, Enum):
    """Relationships that can be fanned out from a parent word.

    Each member knows which entity kind its child ids point at.
    """

    EXAMPLES = "examples"
    ENGLISH_TRANSLATIONS = "english_translations"
    POLISH_TRANSLATIONS = "polish_translations"

    @property
    def entity_kind(self) -> EntityKind:
        if self is ChildKind.EXAMPLES:
            return EntityKind.EXAMPLE
        return EntityKind.WORD

    @classmethod
    def translations_of(cls, language: Language) -> ChildKind:
        """Child kind holding the translations of a word in *language*."""
        if language is Language.POLISH:
            return cls.ENGLISH_TRANSLATIONS
        return cls.POLISH_TRANSLATIONS


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WordModel:
    """A word spelled in one language."""

    id: int | None
    text: str
    language: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TranslationModel:
    """An edge between a Polish word and an English word."""

    id: int | None
    word_id_pl: int
    word_id_en: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ExampleModel:
    """An example sentence attached to a word."""

    id: int | None
    word_id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        # Callers see examples as {id, text}
        return {"id": self.id, "text": self.text}


Entity = Union[WordModel, TranslationModel, ExampleModel]
