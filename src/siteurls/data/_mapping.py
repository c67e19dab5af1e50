"""Row-to-dataclass mapping with type coercion.

Converts ``sqlite3.Row`` objects (or plain dicts) into frozen dataclasses.
SQLite stores flags as integers and may return ports as either ``int`` or
``str`` depending on how the row was written; annotated ``bool`` and
``str`` fields are coerced accordingly.
"""

import dataclasses
import types
from collections.abc import Mapping
from typing import Any, TypeVar, get_args, get_origin

T = TypeVar("T")

_COERCIBLE: dict[type, Any] = {
    bool: lambda v: v.strip().upper() in ("1", "Y", "TRUE") if isinstance(v, str) else bool(v),
    str: str,
}


def _coercion_map(cls: type) -> dict[str, type | None]:
    """Build a ``{field_name: target_type}`` map; ``None`` means pass through."""
    result: dict[str, type | None] = {}
    for f in dataclasses.fields(cls):
        annotation = f.type
        # Optional (X | None) coerces to the non-None branch
        if get_origin(annotation) is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            annotation = args[0] if len(args) == 1 else None
        result[f.name] = annotation if annotation in _COERCIBLE else None
    return result


def _coerce(value: Any, target: type | None) -> Any:
    if target is None or value is None or type(value) is target:
        return value
    return _COERCIBLE[target](value)


def map_row(cls: type[T], row: Mapping[str, Any]) -> T:
    """Map a dict-like row to a dataclass instance.

    Columns without a matching field are ignored. Raises ``TypeError`` if
    *cls* is not a dataclass or a required field is missing from the row.
    """
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass"
        raise TypeError(msg)

    coercion = _coercion_map(cls)
    return cls(**{k: _coerce(row[k], coercion[k]) for k in row.keys() if k in coercion})
