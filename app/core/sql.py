"""
Helpers for building parameterized SQL.

Builders emit numbered placeholders ($1, $2, ...) and return the values in
placeholder order. `execute` rebinds the numbered placeholders as named bind
parameters on a SQLAlchemy `text()` clause, so request values never end up in
the SQL string itself.
"""

import re
from typing import Any, Callable, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str]
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: Field name -> new value, only the fields to change
        js_to_sql: Field name -> column name, for fields whose column differs

    Returns:
        (set_cols, values), e.g. {"firstName": "Aliya", "age": 32} with
        {"firstName": "first_name"} gives
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If there is nothing to update
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(key, key)}"=${idx}' for idx, key in enumerate(keys, start=1)]

    return ", ".join(cols), [data_to_update[key] for key in keys]


class FilterRule(NamedTuple):
    """
    One recognized filter key.

    `template` holds a single "{}" where the placeholder goes. When `bind` is
    False the template is a fixed predicate and the value is not bound.
    """
    template: str
    transform: Optional[Callable[[Any], Any]] = None
    bind: bool = True


# Pair with "LIKE {} ESCAPE '\'" so these match literally
_LIKE_SPECIALS = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})


def contains_ci(value: Any) -> str:
    """LIKE pattern for a case-insensitive partial match against LOWER(column)."""
    return f"%{str(value).lower().translate(_LIKE_SPECIALS)}%"


def sql_for_filters(
    filters: Mapping[str, Any],
    rules: Mapping[str, FilterRule],
    ranges: Iterable[Tuple[str, str]] = (),
    start: int = 1
) -> Tuple[str, List[Any]]:
    """
    Build a WHERE predicate from recognized filter keys.

    Args:
        filters: Filter key -> value
        rules: Filter key -> FilterRule for the entity
        ranges: (min_key, max_key) pairs that must not be inverted
        start: Number of the first placeholder

    Returns:
        (where, values). `where` is "" when no filter applies.

    Raises:
        BadRequestError: On an unknown key or an inverted range
    """
    unknown = [key for key in filters if key not in rules]
    if unknown:
        raise BadRequestError(f"Unknown filter(s): {', '.join(unknown)}")

    for min_key, max_key in ranges:
        low, high = filters.get(min_key), filters.get(max_key)
        if low is not None and high is not None and low > high:
            raise BadRequestError(f"{min_key} cannot be greater than {max_key}")

    predicates = []
    values: List[Any] = []
    for key, value in filters.items():
        rule = rules[key]
        if not rule.bind:
            predicates.append(rule.template)
            continue
        values.append(rule.transform(value) if rule.transform else value)
        predicates.append(rule.template.format(f"${start + len(values) - 1}"))

    return " AND ".join(predicates), values


def bind_numbered(sql: str, values: Sequence[Any]) -> Tuple[str, dict]:
    """Rewrite $n placeholders to :pn and build the matching params dict."""
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _rename(match: "re.Match") -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(f"No value supplied for placeholder ${match.group(1)}")
        return f":{name}"

    return _PLACEHOLDER.sub(_rename, sql), params


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """Run SQL written with $n placeholders against the session."""
    statement, params = bind_numbered(sql, values)
    return db.execute(text(statement), params)
