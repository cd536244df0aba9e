from typing import Any, Dict, Iterable, List, Tuple


def set_clause(fields: Dict[str, Any], allowed: Iterable[str], start: int = 1) -> Tuple[str, List[Any]]:
    """
    Build ``"col" = $n, ...`` for a partial UPDATE.
    Column names come from *allowed*, never from the caller's keys directly.
    """
    allowed = set(allowed)
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Columns not updatable: {sorted(unknown)}")

    parts = []
    values = []
    for offset, (column, value) in enumerate(fields.items()):
        parts.append(f'"{column}" = ${start + offset}')
        values.append(value)
    return ", ".join(parts), values


def nest(row: Dict[str, Any], prefix: str, key: str) -> Dict[str, Any]:
    """
    Move ``prefix``-ed columns of a joined row under *key*, the way the
    frontend receives embedded resources. A LEFT JOIN miss becomes None.
    """
    outer = {}
    inner = {}
    for column, value in row.items():
        if column.startswith(prefix):
            inner[column[len(prefix):]] = value
        else:
            outer[column] = value
    outer[key] = inner if any(v is not None for v in inner.values()) else None
    return outer
