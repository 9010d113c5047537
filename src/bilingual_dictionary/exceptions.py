"""Custom exception hierarchy for bilingual-dictionary."""


class DictionaryError(Exception):
    """Base exception for all bilingual-dictionary errors."""


class ValidationError(DictionaryError):
    """Invalid caller input (empty text, unknown filter column)."""


class EntityNotFoundError(DictionaryError):
    """Entity doesn't exist in the database."""


class UnsupportedLanguageError(DictionaryError):
    """Language tag outside the supported set."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"Unsupported language: {language!r}")


class ConstraintViolationError(DictionaryError):
    """Uniqueness or referential rule broken at the storage layer."""


class AggregateFetchError(DictionaryError):
    """One or more concurrent child lookups failed."""


class DatabaseError(DictionaryError):
    """Schema version mismatch, connection failure."""


class ConfigError(DictionaryError):
    """Unreadable or malformed configuration."""
