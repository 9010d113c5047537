"""bilingual-dictionary: Polish-English words, translations, and examples."""

__version__ = "0.1.0"

from .exceptions import (
    AggregateFetchError as AggregateFetchError,
    ConfigError as ConfigError,
    ConstraintViolationError as ConstraintViolationError,
    DatabaseError as DatabaseError,
    DictionaryError as DictionaryError,
    EntityNotFoundError as EntityNotFoundError,
    UnsupportedLanguageError as UnsupportedLanguageError,
    ValidationError as ValidationError,
)
from .models import (
    ChildKind as ChildKind,
    EntityKind as EntityKind,
    ExampleModel as ExampleModel,
    Language as Language,
    TranslationModel as TranslationModel,
    WordModel as WordModel,
)
from .config import (
    DictionaryConfig as DictionaryConfig,
    load_config as load_config,
)
from .db import Database as Database
from .repository import Repository as Repository
from .fanout import FanOutFetcher as FanOutFetcher
from .coordinator import MutationCoordinator as MutationCoordinator
from .service import DictionaryService as DictionaryService

# Batch module - import as submodule to avoid naming conflicts
from . import batch

__all__ = [
    "batch",
    # Service and collaborators
    "DictionaryService",
    "Database",
    "Repository",
    "FanOutFetcher",
    "MutationCoordinator",
    # Configuration
    "DictionaryConfig",
    "load_config",
    # Models
    "ChildKind",
    "EntityKind",
    "ExampleModel",
    "Language",
    "TranslationModel",
    "WordModel",
    # Exceptions
    "AggregateFetchError",
    "ConfigError",
    "ConstraintViolationError",
    "DatabaseError",
    "DictionaryError",
    "EntityNotFoundError",
    "UnsupportedLanguageError",
    "ValidationError",
]
