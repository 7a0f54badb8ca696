from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import RuleLoadError


def load_document(source: Any, *, base_dir: str | None = None) -> Any:
    """Load a JSON document from native data, JSON text or a file path.

    Args:
        source: Document source. Can be:
            - a ``dict`` or ``list``, returned as is
            - a JSON string (detected by a leading ``{`` or ``[`` after
              stripping whitespace)
            - a ``Path``, or a string naming an existing file
            - any other JSON text, e.g. ``"42"`` or ``"true"``
        base_dir: Base directory for resolving relative file paths.

    Returns:
        The decoded document.

    Raises:
        RuleLoadError: If the source cannot be read or decoded. Wraps the
            underlying ``json.JSONDecodeError`` or ``OSError``.

    Examples:
        >>> load_document('{"var": "a"}')
        {'var': 'a'}

        >>> load_document("rules/adult.json", base_dir="/app/config")
        {...}
    """
    if isinstance(source, (dict, list)):
        return source

    try:
        if isinstance(source, Path):
            return _read(source, base_dir)
        if isinstance(source, str):
            text = source.strip()
            if text.startswith(("{", "[")):
                return json.loads(text)
            path = _resolve(Path(text), base_dir) if text else None
            if path is not None and path.is_file():
                return _read(path, None)
            return json.loads(text)
    except (json.JSONDecodeError, OSError) as exc:
        raise RuleLoadError(str(exc)) from exc

    raise RuleLoadError(f"Unsupported source type: {type(source).__name__}")


def load_rule(source: Any, *, base_dir: str | None = None) -> Any:
    """Load a rule tree; see ``load_document()``.

    The rule is decoded only; its operators are checked when it is
    evaluated.
    """
    return load_document(source, base_dir=base_dir)


def load_data(source: Any, *, base_dir: str | None = None) -> Any:
    """Load a data context; ``None`` yields an empty context."""
    if source is None:
        return {}
    return load_document(source, base_dir=base_dir)


def _resolve(path: Path, base_dir: str | None) -> Path:
    if not path.is_absolute() and base_dir:
        return Path(base_dir) / path
    return path


def _read(path: Path, base_dir: str | None) -> Any:
    return json.loads(_resolve(path, base_dir).read_text(encoding="utf-8"))
