"""
Batch change requests for bilingual-dictionary.

Changes to the dictionary can be written down in YAML and applied in
one go:

    from bilingual_dictionary import DictionaryService
    from bilingual_dictionary.batch import (
        load_change_request,
        execute_change_request,
    )

    request = load_change_request("changes.yaml")
    with DictionaryService("dictionary.db") as service:
        result = execute_change_request(service, request)
    print(f"Applied {result.success_count}/{result.total_count} changes")
"""

from .schema import (
    OperationType as OperationType,
    REQUIRED_FIELDS as REQUIRED_FIELDS,
    Change as Change,
    ChangeRequest as ChangeRequest,
    ChangeResult as ChangeResult,
    BatchResult as BatchResult,
)

from .parser import (
    load_change_request as load_change_request,
    ParseError as ParseError,
)

from .executor import (
    execute_change_request as execute_change_request,
)

__all__ = [
    "OperationType",
    "REQUIRED_FIELDS",
    "Change",
    "ChangeRequest",
    "ChangeResult",
    "BatchResult",
    "load_change_request",
    "execute_change_request",
    "ParseError",
]
