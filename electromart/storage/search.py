"""
Search Builder for ElectroMart

Turns a caller-supplied criteria mapping into a filtered query:
- Unsupported field names are ignored
- Values are coerced to the field's type; uncoercible values are dropped
- Free text uses substring containment, statuses are lower-cased first
- Everything else is exact equality
- All surviving criteria are ANDed together

An empty (or fully dropped) mapping matches every live row.
"""

from typing import Any, Mapping, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from electromart.validation import MIN_INTEGER
from .specs import EntitySpec, Match, SearchField


_DROP = object()


def coerce_value(search_field: SearchField, raw: Any) -> Any:
    """
    Coerce a raw criterion to the field's type.

    Returns the module-level drop sentinel if the value cannot be used.
    """
    if raw is None:
        return _DROP

    if search_field.kind is str:
        value = str(raw).strip()
        return value or _DROP

    if isinstance(raw, bool):
        return _DROP

    try:
        if search_field.kind is int:
            if isinstance(raw, float):
                if not raw.is_integer():
                    return _DROP
                value = int(raw)
            else:
                value = int(str(raw).strip())
            return value if MIN_INTEGER <= value <= search_field.max_value else _DROP

        if search_field.kind is float:
            if isinstance(raw, (int, float)):
                return float(raw)
            return float(str(raw).strip())

    except (ValueError, OverflowError):
        return _DROP

    return _DROP


def normalize_criteria(spec: EntitySpec, criteria: Mapping[str, Any]) -> dict[str, Any]:
    """
    Keep only supported, coercible criteria.

    Args:
        spec: Entity spec listing the searchable fields
        criteria: Raw field -> value mapping

    Returns:
        Field -> coerced value mapping
    """
    normalized = {}

    for name, raw in criteria.items():
        search_field = spec.search_field(name)
        if search_field is None:
            logger.debug(f"Ignoring unsupported {spec.key} search field '{name}'")
            continue

        value = coerce_value(search_field, raw)
        if value is _DROP:
            logger.debug(f"Dropping {spec.key} search value for '{name}': {raw!r}")
            continue

        normalized[name] = value

    return normalized


def build_search_query(
    session: Session,
    spec: EntitySpec,
    criteria: Optional[Mapping[str, Any]] = None,
) -> Query:
    """
    Build the conjunctive query for a criteria mapping.

    Args:
        session: Active database session
        spec: Entity spec for the searched entity
        criteria: Raw field -> value mapping

    Returns:
        Query over live rows of the spec's model
    """
    model = spec.model
    query = session.query(model).filter(model.deleted_at.is_(None))

    for name, value in normalize_criteria(spec, criteria or {}).items():
        column = getattr(model, name)
        match = spec.search_field(name).match

        if match == Match.CONTAINS:
            query = query.filter(column.contains(value, autoescape=True))
        elif match == Match.CONTAINS_LOWER:
            query = query.filter(func.lower(column).contains(value.lower(), autoescape=True))
        else:
            query = query.filter(column == value)

    return query
