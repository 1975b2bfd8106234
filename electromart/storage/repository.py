"""
Entity Repository for ElectroMart

One generic CRUD + search engine driven by an EntitySpec:
- Point lookups and full listings over live rows
- Create and update through the ordered setter pipeline
- Hard delete after an existence check
- Criteria search via the search builder

Design Decisions:
1. Session is injected: one session per request, owned by the caller
2. Nothing is persisted when validation fails (update rolls back)
3. Store errors propagate as SQLAlchemyError; the HTTP layer maps them
"""

from typing import Any, Mapping, Optional

from loguru import logger
from sqlalchemy.orm import Session

from .models import generate_id
from .search import build_search_query
from .setters import exists, validate_payload
from .specs import EntitySpec


class EntityRepository:
    """
    Repository for one entity kind.

    Usage:
        spec = build_entity_specs()["product"]
        repo = EntityRepository(session, spec)

        product = repo.create({
            "name": "Laptop",
            "description": "14 inch",
            "price": 999.0,
            "stock_quantity": 3,
            "brand_id": brand.id,
            "category_id": category.id,
        })

        matches = repo.search({"name": "Lap"})
    """

    def __init__(
        self,
        session: Session,
        spec: EntitySpec,
        collect_all_errors: bool = False,
    ):
        """
        Initialize repository.

        Args:
            session: Database session for this unit of work
            spec: Entity spec driving validation and search
            collect_all_errors: Report every failing field, not just the first
        """
        self.session = session
        self.spec = spec
        self.model = spec.model
        self.collect_all_errors = collect_all_errors

    def _live(self):
        return self.session.query(self.model).filter(self.model.deleted_at.is_(None))

    def exists(self, record_id: int) -> bool:
        """True iff a live row with this id exists."""
        return exists(self.session, self.model, record_id)

    def get_all(self) -> list:
        """
        List every live row.

        Returns:
            List of entities (empty when there are none)
        """
        return self._live().all()

    def get(self, record_id: int) -> Optional[Any]:
        """
        Get entity by ID.

        Args:
            record_id: Entity ID

        Returns:
            Entity or None
        """
        return self._live().filter(self.model.id == record_id).first()

    def first_by(self, **filters) -> Optional[Any]:
        """Get the first live entity whose columns equal the given values."""
        query = self._live()
        for name, value in filters.items():
            query = query.filter(getattr(self.model, name) == value)
        return query.first()

    def create(self, payload: Mapping[str, Any]) -> Any:
        """
        Validate a payload and persist a new entity.

        The identifier is generated before validation runs.

        Args:
            payload: Incoming field values

        Returns:
            Created entity

        Raises:
            ValidationFailure: If any setter rejects its field
        """
        entity = self.model(id=generate_id())

        validate_payload(
            entity,
            self.spec,
            dict(payload),
            self.session,
            creating=True,
            collect_all=self.collect_all_errors,
        )

        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)

        logger.info(f"Created {self.spec.key} {entity.id}")
        return entity

    def update(self, record_id: int, payload: Mapping[str, Any]) -> Optional[Any]:
        """
        Run every setter against a payload for an existing entity.

        Args:
            record_id: Entity ID
            payload: Incoming field values (full replacement)

        Returns:
            Updated entity, or None if no live entity has this id

        Raises:
            ValidationFailure: If any setter rejects its field
        """
        entity = self.get(record_id)
        if entity is None:
            return None

        try:
            validate_payload(
                entity,
                self.spec,
                dict(payload),
                self.session,
                creating=False,
                collect_all=self.collect_all_errors,
            )
        except Exception:
            # Discard whatever the setters already assigned
            self.session.rollback()
            raise

        self.session.commit()
        self.session.refresh(entity)

        logger.info(f"Updated {self.spec.key} {entity.id}")
        return entity

    def delete(self, record_id: int) -> bool:
        """
        Hard-delete an entity.

        Args:
            record_id: Entity ID

        Returns:
            True if deleted, False if no live entity has this id
        """
        if not self.exists(record_id):
            return False

        self.session.query(self.model).filter(
            self.model.id == record_id,
        ).delete(synchronize_session=False)
        self.session.commit()

        logger.info(f"Deleted {self.spec.key} {record_id}")
        return True

    def search(self, criteria: Optional[Mapping[str, Any]] = None) -> list:
        """
        Search live entities.

        Args:
            criteria: Field -> value filters, ANDed together

        Returns:
            Matching entities, possibly empty
        """
        return build_search_query(self.session, self.spec, criteria).all()
