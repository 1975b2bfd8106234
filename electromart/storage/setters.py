"""
Entity Setters for ElectroMart

Validate-then-assign on one field at a time:
- Plain fields run their check, then assign (optionally transformed)
- Foreign keys run an existence lookup against the referenced table
- A failing setter leaves the entity untouched and reports False

Setters never raise for bad input. Store failures during an existence
lookup are not folded into False; they propagate to the caller.
"""

from typing import Any

from loguru import logger
from sqlalchemy.orm import Session

from electromart.validation import check_record_id
from .specs import EntitySpec, FieldRule


class ValidationFailure(Exception):
    """One or more setters rejected a payload."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(self.messages[0] if self.messages else "validation failed")

    @property
    def message(self) -> str:
        return self.messages[0]


def exists(session: Session, model: type, record_id: Any) -> bool:
    """
    Check whether a live (non-deleted) row with this primary key exists.

    Args:
        session: Active database session
        model: Mapped model class
        record_id: Primary key candidate

    Returns:
        True if the row exists and is not soft-deleted

    Raises:
        SQLAlchemyError: If the lookup itself fails
    """
    if not check_record_id(record_id):
        return False

    found = session.query(model.id).filter(
        model.id == record_id,
        model.deleted_at.is_(None),
    ).first()

    return found is not None


def set_field(entity: Any, rule: FieldRule, candidate: Any, session: Session) -> bool:
    """
    Validate a candidate value and assign it to the entity on success.

    Args:
        entity: Model instance being built or updated
        rule: Field rule to apply
        candidate: Incoming value
        session: Session used for foreign-key lookups

    Returns:
        True if the value was accepted and assigned
    """
    if rule.is_foreign_key:
        if not exists(session, rule.references, candidate):
            return False
    elif not rule.check(candidate):
        return False

    value = rule.transform(candidate) if rule.transform else candidate
    setattr(entity, rule.name, value)
    return True


def _resolve_candidate(rule: FieldRule, payload: dict, creating: bool) -> tuple[bool, Any]:
    """Pick the value a rule should see, or signal that it should be skipped."""
    candidate = payload.get(rule.name)
    if candidate is not None:
        return True, candidate

    if creating and rule.default_on_create is not None:
        return True, rule.default_on_create

    if rule.optional or (not creating and rule.optional_on_update):
        return False, None

    return True, None


def apply_rules(
    entity: Any,
    spec: EntitySpec,
    payload: dict,
    session: Session,
    creating: bool = True,
    collect_all: bool = False,
) -> list[str]:
    """
    Run every rule of an entity spec against a payload, in field order.

    Args:
        entity: Model instance to populate
        spec: Entity spec providing ordered rules
        payload: Incoming field values
        session: Session used for foreign-key lookups
        creating: True for create, False for update
        collect_all: Keep going after the first failure

    Returns:
        Failure messages in field order (empty on success)
    """
    failures: list[str] = []

    # Existence lookups must not flush a half-validated entity
    with session.no_autoflush:
        for rule in spec.rules:
            apply, candidate = _resolve_candidate(rule, payload, creating)
            if not apply:
                continue

            if set_field(entity, rule, candidate, session):
                continue

            logger.debug(f"{spec.label} rejected field '{rule.name}'")
            failures.append(rule.message)
            if not collect_all:
                break

    return failures


def validate_payload(
    entity: Any,
    spec: EntitySpec,
    payload: dict,
    session: Session,
    creating: bool = True,
    collect_all: bool = False,
) -> None:
    """Like apply_rules, but raise ValidationFailure instead of returning messages."""
    failures = apply_rules(
        entity,
        spec,
        payload,
        session,
        creating=creating,
        collect_all=collect_all,
    )
    if failures:
        raise ValidationFailure(failures)
