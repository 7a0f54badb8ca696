"""Path-based lookups into the data context.

These back the ``var``, ``val``, ``missing``, ``missing_some``, ``exists``
and ``get`` operators.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .context import unwrap_context
from .utils import MISSING, deep_get, is_array, is_logic, lookup_key

if TYPE_CHECKING:
    from .engine import RuleEngine


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def get_variable_value(engine: RuleEngine, path: Any, data: Any, default: Any = None) -> Any:
    """Resolve ``path`` against ``data``.

    Args:
        engine: Engine used to resolve a fallback given as ``[key, fallback]``.
        path: One of:
            - ``""``, ``None`` or ``[]``: the whole context
            - a key or dotted path (``"user.address.city"``, ``"items.0"``)
            - an integer index into a list context
            - ``[path]``: same as ``path``
            - ``[path, fallback]``: ``fallback`` (resolved) when the lookup
              misses or yields ``None`` / ``""``
        data: The data context.
        default: Returned when the lookup misses. Pass ``MISSING`` to tell
            absence apart from a present ``None``.

    Returns:
        The looked-up value, or ``default``.

    Examples:
        >>> get_variable_value(engine, "a.b", {"a": {"b": 1}})
        1
        >>> get_variable_value(engine, ["a.c", "n/a"], {"a": {"b": 1}})
        'n/a'
    """
    if path is None or path == "":
        return unwrap_context(data)

    if not is_array(data):
        return default

    if isinstance(path, (list, tuple)):
        if len(path) > 1:
            fallback = engine.resolve_value(path[1], data)
            value = get_variable_value(engine, path[0], data, default)
            if value is default or _is_blank(value):
                return fallback
            return value
        if len(path) == 0:
            return unwrap_context(data)
        if is_array(path[0]):
            return default
        path = path[0]
        if path is None or path == "":
            return unwrap_context(data)

    if isinstance(path, bool) or not isinstance(path, (str, int, float)):
        return default

    value = lookup_key(data, path)
    if value is not MISSING:
        return value

    if isinstance(path, str) and "." in path:
        return deep_get(data, path, default)

    return default


def find_missing(engine: RuleEngine, keys: Any, data: Any) -> list[Any]:
    """Return the keys whose lookup is absent, ``None`` or ``""``.

    ``keys`` may be a single key, a list of keys, or an operation producing
    either (e.g. a ``merge``).
    """
    if is_logic(keys):
        keys = engine.resolve_value(keys, data)
    if not isinstance(keys, (list, tuple)):
        keys = [keys]

    missing = []
    for key in keys:
        value = get_variable_value(engine, key, data, MISSING)
        if value is MISSING or _is_blank(value):
            missing.append(key)
    return missing


def _read_attribute(obj: Any, name: Any) -> Any:
    # Plain objects only; private names and builtin scalars are never read.
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return None
    if not isinstance(name, str) or not name or name.startswith("_"):
        return None
    return getattr(obj, name, None)


def walk_keys(path: Any, data: Any) -> Any:
    """Lookup used by ``val``: a plain walk over nested keys.

    Unlike ``get_variable_value()`` there is no dot splitting and no
    fallback pair. A scalar ``path`` is a single key; a list ``path`` is a
    sequence of keys descending through dicts, lists and object attributes.
    Any miss returns ``None``.
    """
    if path is None:
        return None
    if isinstance(path, Mapping):
        return None
    if not isinstance(path, (list, tuple)):
        path = [path]
    if not path:
        return None

    cur = data
    for key in path:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            return None
        if is_array(cur):
            cur = lookup_key(cur, key, None)
        else:
            cur = _read_attribute(cur, key)
        if cur is None:
            return None
    return cur


def get_property(container: Any, key: Any, default: Any = None) -> Any:
    """Lookup used by ``get``: one key, index or attribute, else ``default``."""
    if is_array(container):
        value = lookup_key(container, key, None)
    else:
        value = _read_attribute(container, key)
    return default if value is None else value
