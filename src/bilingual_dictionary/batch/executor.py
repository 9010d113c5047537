"""
Executor for batch change requests.

Applies changes to the dictionary through :class:`DictionaryService`.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..exceptions import DictionaryError
from ..service import DictionaryService
from .schema import (
    BatchResult,
    Change,
    ChangeRequest,
    ChangeResult,
    OperationType,
)

logger = logging.getLogger(__name__)

# Handler: (service, params) -> (message, created_id)
_Handler = Callable[[DictionaryService, Dict[str, Any]], Tuple[str, Optional[int]]]


def execute_change_request(
    service: DictionaryService,
    request: ChangeRequest,
    dry_run: bool = False,
) -> BatchResult:
    """Execute a batch change request.

    Changes run in file order. A failing change is reported in its
    ChangeResult and does not stop the ones after it.

    Args:
        service: Dictionary to modify
        request: The change request to execute
        dry_run: If True, only simulate execution without making changes

    Returns:
        BatchResult with details of each change
    """
    start_time = time.time()
    results: List[ChangeResult] = []

    logger.info(
        f"{'Simulating' if dry_run else 'Applying'} {len(request.changes)} change(s)"
        + (f" from {request.source_file}" if request.source_file else "")
    )
    for i, change in enumerate(request.changes):
        results.append(_execute_change(service, change, i, dry_run))

    success_count = sum(1 for r in results if r.success)
    return BatchResult(
        total_count=len(results),
        success_count=success_count,
        failure_count=len(results) - success_count,
        changes=results,
        duration_seconds=time.time() - start_time,
    )


def _execute_change(
    service: DictionaryService,
    change: Change,
    index: int,
    dry_run: bool,
) -> ChangeResult:
    """Execute a single change operation."""
    op = change.operation

    if dry_run:
        return ChangeResult(
            index=index,
            operation=op,
            success=True,
            message=f"Would execute {op}",
            target=change.target,
        )

    handler = _HANDLERS.get(op)
    if handler is None:
        return ChangeResult(
            index=index,
            operation=op,
            success=False,
            message=f"Unknown operation: {op}",
            target=change.target,
            error=f"Unknown operation: {op}",
        )

    try:
        message, created_id = handler(service, change.params)
    except DictionaryError as e:
        logger.warning(f"Change #{index + 1} ({op}) failed: {e}")
        return ChangeResult(
            index=index,
            operation=op,
            success=False,
            message=f"Error: {e}",
            target=change.target,
            error=str(e),
        )

    return ChangeResult(
        index=index,
        operation=op,
        success=True,
        message=message,
        target=change.target,
        created_id=created_id,
    )


# =============================================================================
# Operation handlers
# =============================================================================

def _exec_add_word(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    word = service.add_word(p["text"], p["language"])
    return f"Word '{word.text}' ({word.language}) has id {word.id}", word.id


def _exec_update_word(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    word = service.update_word(p["old_text"], p["language"], p["new_text"])
    return f"Renamed '{p['old_text']}' to '{word.text}'", None


def _exec_delete_word(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    service.delete_word(p["text"], p["language"])
    return f"Deleted word '{p['text']}' ({p['language']})", None


def _exec_add_example(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    example = service.add_example(p["word"], p["language"], p["example"])
    return f"Example for '{p['word']}' has id {example.id}", example.id


def _exec_update_example(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    service.update_example(p["id"], p["example"])
    return f"Updated example #{p['id']}", None


def _exec_delete_example(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    service.delete_example(p["id"])
    return f"Deleted example #{p['id']}", None


def _exec_add_translation(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    translation = service.add_translation(p["pl"], p["en"])
    return f"Linked '{p['pl']}' <-> '{p['en']}'", translation.id


def _exec_update_translation(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    service.update_translation(p["old_pl"], p["old_en"], p["new_pl"], p["new_en"])
    return (
        f"Relinked '{p['old_pl']}' <-> '{p['old_en']}' "
        f"as '{p['new_pl']}' <-> '{p['new_en']}'"
    ), None


def _exec_delete_translation(service: DictionaryService, p: Dict[str, Any]) -> Tuple[str, Optional[int]]:
    service.delete_translation(p["pl"], p["en"])
    return f"Unlinked '{p['pl']}' <-> '{p['en']}'", None


_HANDLERS: Dict[str, _Handler] = {
    OperationType.ADD_WORD.value: _exec_add_word,
    OperationType.UPDATE_WORD.value: _exec_update_word,
    OperationType.DELETE_WORD.value: _exec_delete_word,
    OperationType.ADD_EXAMPLE.value: _exec_add_example,
    OperationType.UPDATE_EXAMPLE.value: _exec_update_example,
    OperationType.DELETE_EXAMPLE.value: _exec_delete_example,
    OperationType.ADD_TRANSLATION.value: _exec_add_translation,
    OperationType.UPDATE_TRANSLATION.value: _exec_update_translation,
    OperationType.DELETE_TRANSLATION.value: _exec_delete_translation,
}
