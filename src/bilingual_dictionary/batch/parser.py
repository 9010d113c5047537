"""
YAML parser for batch change requests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .schema import INTEGER_FIELDS, REQUIRED_FIELDS, Change, ChangeRequest


class ParseError(Exception):
    """Error parsing a change request file."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(message)


def load_change_request(
    source: Union[str, Path, Dict[str, Any]],
) -> ChangeRequest:
    """Load a change request from a YAML file or dictionary.

    Args:
        source: Path to YAML file, YAML string, or parsed dictionary

    Returns:
        ChangeRequest object

    Raises:
        ParseError: If the file cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    source_path: Optional[Path] = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and _is_file_path(source)):
        source_path = Path(source)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        with open(source_path, "r", encoding="utf-8") as f:
            data = _load_yaml(f.read())
    else:
        data = _load_yaml(source)

    return _parse_change_request(data, source_path)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _load_yaml(s: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(s)
    except yaml.YAMLError as e:
        line = getattr(e, "problem_mark", None)
        line_num = line.line + 1 if line else None
        raise ParseError(f"Invalid YAML: {e}", line=line_num) from e

    if data is None:
        raise ParseError("Empty YAML content")
    if not isinstance(data, dict):
        raise ParseError("YAML root must be a mapping (dictionary)")

    return data


def _parse_change_request(
    data: Dict[str, Any],
    source_path: Optional[Path] = None,
) -> ChangeRequest:
    """Parse a dictionary into a ChangeRequest object."""
    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise ParseError("Field 'description' must be a string")

    changes_data = data.get("changes")
    if changes_data is None:
        raise ParseError("Missing required field: 'changes'")
    if not isinstance(changes_data, list):
        raise ParseError("Field 'changes' must be a list")
    if len(changes_data) == 0:
        raise ParseError("Field 'changes' cannot be empty")

    return ChangeRequest(
        changes=_parse_changes(changes_data),
        description=description,
        source_file=source_path,
    )


def _parse_changes(changes_data: List[Any]) -> List[Change]:
    """Parse a list of change dictionaries into Change objects."""
    changes = []

    for i, change_data in enumerate(changes_data):
        if not isinstance(change_data, dict):
            raise ParseError(f"Change #{i + 1} must be a mapping (dictionary)")

        operation = change_data.get("operation")
        if not operation:
            raise ParseError(f"Change #{i + 1}: Missing required field 'operation'")
        if operation not in REQUIRED_FIELDS:
            raise ParseError(f"Change #{i + 1}: Unknown operation '{operation}'")

        params = {k: v for k, v in change_data.items() if k != "operation"}
        missing = [f for f in REQUIRED_FIELDS[operation] if params.get(f) is None]
        if missing:
            raise ParseError(
                f"Change #{i + 1} ({operation}): Missing required field(s): "
                f"{', '.join(missing)}"
            )
        for name in INTEGER_FIELDS & params.keys():
            if isinstance(params[name], bool) or not isinstance(params[name], int):
                raise ParseError(f"Change #{i + 1} ({operation}): '{name}' must be an integer")

        changes.append(Change(operation=operation, params=params))

    return changes
