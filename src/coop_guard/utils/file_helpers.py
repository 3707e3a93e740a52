"""Shared file utilities for coop-guard.

- require_file_exists: FileNotFoundError with a readable message
- load_validated_json: JSON file + Pydantic validation with consistent errors
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

# Type variable for Pydantic models
T = TypeVar("T", bound=BaseModel)

__all__ = [
    "load_validated_json",
    "require_file_exists",
]


def require_file_exists(file_path: Path, file_type: str = "file") -> None:
    """Raise FileNotFoundError if file doesn't exist.

    Args:
        file_path: Path to check.
        file_type: Description for error message (e.g., "configuration").

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if file_path.exists():
        return
    raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}.")


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
    encoding: str | None = "utf-8",
) -> T:
    """Load JSON file and validate against Pydantic model.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").
        encoding: File encoding.

    Returns:
        Validated Pydantic model instance.

    Raises:
        ValueError: If the file cannot be read, is not JSON, or fails validation.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise ValueError(f"Invalid {file_type} file {file_path}:\n" + "\n".join(errors)) from e
