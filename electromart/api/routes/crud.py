"""
Generic CRUD Routes

Builds the six standard endpoints for one entity collection:
list, search, get, create, update and delete.
"""

from typing import Type

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from electromart.api.dependencies import repository_dependency
from electromart.api.middleware import NotFoundError, StoreError, ValidationError
from electromart.api.schemas import ErrorResponse, MAX_RECORD_ID
from electromart.storage import EntityRepository, EntitySpec, ValidationFailure


def parse_record_id(raw: str, spec: EntitySpec) -> int:
    """
    Parse a path identifier.

    Anything that is not an unsigned 32-bit integer cannot name a row,
    so it is reported as not found.
    """
    if raw.isascii() and raw.isdigit():
        value = int(raw)
        if value <= MAX_RECORD_ID:
            return value
    raise NotFoundError(spec.not_found_message)


def validation_error(failure: ValidationFailure) -> ValidationError:
    errors = failure.messages if len(failure.messages) > 1 else None
    return ValidationError(detail=failure.message, errors=errors)


def build_crud_router(
    key: str,
    prefix: str,
    payload_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
) -> APIRouter:
    """
    Create the router for one entity collection.

    Args:
        key: Entity spec key (e.g. "order_item")
        prefix: Collection path (e.g. "/order-items")
        payload_schema: Request body model for create/update
        response_schema: Response model for one entity

    Returns:
        Router with the collection's endpoints
    """
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    get_repository = repository_dependency(key)

    def serialize(entities) -> list:
        return [response_schema.model_validate(entity) for entity in entities]

    @router.get(
        "",
        response_model=list[response_schema],
        responses={500: {"model": ErrorResponse, "description": "Store failure"}},
    )
    def list_entities(repo: EntityRepository = Depends(get_repository)):
        """List every entity in the collection."""
        spec = repo.spec
        try:
            return serialize(repo.get_all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {spec.collection}: {e}")
            raise StoreError(f"Error retrieving {spec.collection}")

    # Registered before "/{record_id}" so "search" is never parsed as an id
    @router.get(
        "/search",
        response_model=list[response_schema],
        responses={404: {"model": ErrorResponse, "description": "No matches"}},
    )
    def search_entities(
        request: Request,
        repo: EntityRepository = Depends(get_repository),
    ):
        """
        Search the collection with query-string criteria.

        Unsupported fields and values of the wrong type are ignored.
        """
        spec = repo.spec
        criteria = dict(request.query_params)
        logger.info(f"Searching {spec.collection}: {criteria}")

        try:
            results = repo.search(criteria)
        except SQLAlchemyError as e:
            logger.error(f"Failed to search {spec.collection}: {e}")
            raise StoreError(f"Error retrieving {spec.collection}")

        if not results:
            raise NotFoundError(spec.empty_search_message)

        return serialize(results)

    @router.get(
        "/{record_id}",
        response_model=response_schema,
        responses={404: {"model": ErrorResponse, "description": "Not found"}},
    )
    def get_entity(record_id: str, repo: EntityRepository = Depends(get_repository)):
        """Get one entity by ID."""
        spec = repo.spec
        entity_id = parse_record_id(record_id, spec)

        try:
            entity = repo.get(entity_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {spec.key} {entity_id}: {e}")
            raise StoreError(f"Error retrieving {spec.label.lower()}")

        if entity is None:
            raise NotFoundError(spec.not_found_message)

        return response_schema.model_validate(entity)

    @router.post(
        "",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse, "description": "Invalid data"}},
    )
    def create_entity(
        payload: payload_schema,
        repo: EntityRepository = Depends(get_repository),
    ):
        """Validate and create a new entity."""
        spec = repo.spec

        try:
            entity = repo.create(payload.model_dump())
        except ValidationFailure as e:
            raise validation_error(e)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create {spec.key}: {e}")
            raise StoreError(f"Error creating {spec.label.lower()}")

        return response_schema.model_validate(entity)

    @router.put(
        "/{record_id}",
        response_model=response_schema,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid data"},
            404: {"model": ErrorResponse, "description": "Not found"},
        },
    )
    def update_entity(
        record_id: str,
        payload: payload_schema,
        repo: EntityRepository = Depends(get_repository),
    ):
        """Re-run every field rule against the payload and save."""
        spec = repo.spec
        entity_id = parse_record_id(record_id, spec)

        try:
            entity = repo.update(entity_id, payload.model_dump())
        except ValidationFailure as e:
            raise validation_error(e)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {spec.key} {entity_id}: {e}")
            raise StoreError(f"Error updating {spec.label.lower()}")

        if entity is None:
            raise NotFoundError(spec.not_found_message)

        return response_schema.model_validate(entity)

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses={404: {"model": ErrorResponse, "description": "Not found"}},
    )
    def delete_entity(record_id: str, repo: EntityRepository = Depends(get_repository)):
        """Hard-delete an entity."""
        spec = repo.spec
        entity_id = parse_record_id(record_id, spec)

        try:
            deleted = repo.delete(entity_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {spec.key} {entity_id}: {e}")
            raise StoreError(f"Error deleting {spec.label.lower()}")

        if not deleted:
            raise NotFoundError(spec.not_found_message)

        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
