"""
Unit tests for the generic entity repository.
"""

from datetime import datetime

import pytest

from electromart.security import verify_password
from electromart.storage import Brand, EntityRepository, ValidationFailure


@pytest.fixture
def brands(db_session, entity_specs) -> EntityRepository:
    return EntityRepository(db_session, entity_specs["brand"])


@pytest.fixture
def products(db_session, entity_specs) -> EntityRepository:
    return EntityRepository(db_session, entity_specs["product"])


@pytest.fixture
def users(db_session, entity_specs) -> EntityRepository:
    return EntityRepository(db_session, entity_specs["user"])


class TestCreate:
    """Tests for entity creation."""

    def test_create_assigns_id_and_persists(self, brands, sample_brand_data):
        created = brands.create(sample_brand_data)

        assert 0 <= created.id <= 0xFFFFFFFF
        assert created.created_at is not None

        fetched = brands.get(created.id)
        assert fetched.name == "Acme"
        assert fetched.description == "Consumer electronics"

    def test_invalid_payload_is_not_stored(self, brands):
        with pytest.raises(ValidationFailure) as exc_info:
            brands.create({"name": "", "description": "x"})

        assert exc_info.value.message == "name is wrongly formatted"
        assert brands.get_all() == []

    def test_missing_foreign_key(self, products, brand):
        payload = {
            "name": "Laptop",
            "description": "14 inch",
            "price": 10.0,
            "stock_quantity": 1,
            "brand_id": brand.id,
            "category_id": 12345,
        }

        with pytest.raises(ValidationFailure) as exc_info:
            products.create(payload)

        assert exc_info.value.message == "invalid category_id or not existing"
        assert products.get_all() == []

    def test_user_password_is_hashed(self, users, sample_user_data):
        created = users.create(sample_user_data)

        assert created.password != sample_user_data["password"]
        assert verify_password(sample_user_data["password"], created.password)
        assert created.role == "regular"

    def test_collect_all_errors(self, db_session, entity_specs):
        repo = EntityRepository(db_session, entity_specs["brand"], collect_all_errors=True)

        with pytest.raises(ValidationFailure) as exc_info:
            repo.create({"name": "", "description": ""})

        assert exc_info.value.messages == [
            "name is wrongly formatted",
            "description is wrongly formatted",
        ]


class TestRead:
    """Tests for listing and point lookups."""

    def test_get_all_empty(self, brands):
        assert brands.get_all() == []

    def test_get_missing_returns_none(self, brands):
        assert brands.get(42) is None

    def test_soft_deleted_rows_hidden(self, db_session, brands, brand):
        brand.deleted_at = datetime.utcnow()
        db_session.commit()

        assert brands.get(brand.id) is None
        assert brands.get_all() == []
        assert not brands.exists(brand.id)

    def test_first_by(self, users, user):
        assert users.first_by(username="ada").id == user.id
        assert users.first_by(username="nobody") is None


class TestUpdate:
    """Tests for full-replacement updates."""

    def test_update_replaces_fields(self, brands, brand):
        updated = brands.update(brand.id, {"name": "Globex", "description": "Everything"})

        assert updated.id == brand.id
        assert brands.get(brand.id).name == "Globex"

    def test_update_missing_returns_none(self, brands):
        assert brands.update(42, {"name": "Globex", "description": "Everything"}) is None

    def test_failed_update_changes_nothing(self, brands, brand):
        with pytest.raises(ValidationFailure):
            brands.update(brand.id, {"name": "Globex", "description": ""})

        stored = brands.get(brand.id)
        assert stored.name == "Acme"
        assert stored.description == "Consumer electronics"

    def test_user_update_keeps_password_when_absent(self, users, user, sample_user_data):
        current_hash = user.password
        payload = dict(sample_user_data, password=None)

        updated = users.update(user.id, payload)

        assert updated.password == current_hash
        assert updated.username == "grace"


class TestDelete:
    """Tests for hard deletes."""

    def test_delete_removes_row(self, db_session, brands, brand):
        assert brands.delete(brand.id)

        assert brands.get(brand.id) is None
        assert db_session.query(Brand).count() == 0

    def test_double_delete(self, brands, brand):
        assert brands.delete(brand.id)
        assert not brands.delete(brand.id)

    def test_delete_missing(self, brands):
        assert not brands.delete(42)


class TestSearch:
    def test_search_delegates_to_builder(self, brands, brand):
        assert [b.id for b in brands.search({"name": "Ac"})] == [brand.id]
        assert brands.search({"name": "Zz"}) == []
