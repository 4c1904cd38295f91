"""Read role and user collections from JSON documents (a top-level array of objects)."""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from subordinates.schemas.hierarchy import Role, User

MAX_ITEMS_PER_LOAD = 100_000
ALLOWED_JSON_EXTENSIONS = frozenset({".json"})

_ROLES_ADAPTER = TypeAdapter(list[Role])
_USERS_ADAPTER = TypeAdapter(list[User])


class DataFileError(Exception):
    """Raised when a roles/users document cannot be read, decoded or validated."""

    def __init__(self, source: str, message: str, cause: Exception | None = None) -> None:
        self.source = source
        self.message = message
        self.cause = cause
        super().__init__(f"{source}: {message}")


def _check_items(data: Any, source: str, max_items: int) -> list:
    if not isinstance(data, list):
        raise DataFileError(source, "document must be a JSON array of objects")
    if len(data) > max_items:
        raise DataFileError(source, f"at most {max_items} items per document")
    return data


def _format_errors(e: ValidationError) -> str:
    """First validation error as 'index.field: msg', plus how many more there were."""
    errors = e.errors()
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    extra = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{loc}: {first.get('msg', 'invalid')}{extra}"


def parse_roles(data: Any, source: str = "<roles>", max_items: int = MAX_ITEMS_PER_LOAD) -> list[Role]:
    """Validate decoded JSON into a list of Role."""
    items = _check_items(data, source, max_items)
    try:
        return _ROLES_ADAPTER.validate_python(items)
    except ValidationError as e:
        raise DataFileError(source, _format_errors(e), e) from e


def parse_users(data: Any, source: str = "<users>", max_items: int = MAX_ITEMS_PER_LOAD) -> list[User]:
    """Validate decoded JSON into a list of User."""
    items = _check_items(data, source, max_items)
    try:
        return _USERS_ADAPTER.validate_python(items)
    except ValidationError as e:
        raise DataFileError(source, _format_errors(e), e) from e


def _read_json(path: str | Path) -> Any:
    p = Path(path)
    if p.suffix.lower() not in ALLOWED_JSON_EXTENSIONS:
        raise DataFileError(str(p), "file must have a .json extension")
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(str(p), f"cannot read file: {e!s}", e) from e
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise DataFileError(str(p), f"invalid JSON: {e!s}", e) from e


def read_roles(path: str | Path, max_items: int = MAX_ITEMS_PER_LOAD) -> list[Role]:
    """Read and validate a roles JSON file."""
    return parse_roles(_read_json(path), source=str(path), max_items=max_items)


def read_users(path: str | Path, max_items: int = MAX_ITEMS_PER_LOAD) -> list[User]:
    """Read and validate a users JSON file."""
    return parse_users(_read_json(path), source=str(path), max_items=max_items)
