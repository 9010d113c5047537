"""
Data classes and constants for batch change requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


# =============================================================================
# Operation Types
# =============================================================================

class OperationType(str, Enum):
    """Supported batch operations."""
    ADD_WORD = "add_word"
    UPDATE_WORD = "update_word"
    DELETE_WORD = "delete_word"
    ADD_EXAMPLE = "add_example"
    UPDATE_EXAMPLE = "update_example"
    DELETE_EXAMPLE = "delete_example"
    ADD_TRANSLATION = "add_translation"
    UPDATE_TRANSLATION = "update_translation"
    DELETE_TRANSLATION = "delete_translation"


# =============================================================================
# Field Requirements
# =============================================================================

# Required fields for each operation
REQUIRED_FIELDS: Dict[str, List[str]] = {
    OperationType.ADD_WORD.value: ["text", "language"],
    OperationType.UPDATE_WORD.value: ["old_text", "language", "new_text"],
    OperationType.DELETE_WORD.value: ["text", "language"],
    OperationType.ADD_EXAMPLE.value: ["word", "language", "example"],
    OperationType.UPDATE_EXAMPLE.value: ["id", "example"],
    OperationType.DELETE_EXAMPLE.value: ["id"],
    OperationType.ADD_TRANSLATION.value: ["pl", "en"],
    OperationType.UPDATE_TRANSLATION.value: ["old_pl", "old_en", "new_pl", "new_en"],
    OperationType.DELETE_TRANSLATION.value: ["pl", "en"],
}

# Fields holding row ids rather than text
INTEGER_FIELDS = {"id"}


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class Change:
    """Single change operation."""
    operation: str
    params: Dict[str, Any]

    @property
    def target(self) -> Optional[str]:
        """Human-readable subject of the change."""
        for key in ("text", "old_text", "word", "pl", "old_pl"):
            if key in self.params:
                return str(self.params[key])
        if "id" in self.params:
            return f"#{self.params['id']}"
        return None


@dataclass
class ChangeRequest:
    """Parsed change request from YAML."""
    changes: List[Change]
    description: Optional[str] = None
    source_file: Optional[Path] = None


@dataclass
class ChangeResult:
    """Result of executing a single change."""
    index: int
    operation: str
    success: bool
    message: str
    target: Optional[str] = None
    created_id: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Result of executing a batch change request."""
    total_count: int
    success_count: int
    failure_count: int
    changes: List[ChangeResult]
    duration_seconds: float
