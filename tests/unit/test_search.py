"""
Unit tests for the search builder.
"""

from datetime import datetime

import pytest

from electromart.storage import (
    Payment,
    Product,
    build_search_query,
    generate_id,
    normalize_criteria,
)


@pytest.fixture
def catalog(db_session, brand, category):
    """Three products under one brand and category."""
    products = [
        Product(
            id=generate_id(),
            name=name,
            description=description,
            price=price,
            stock_quantity=stock,
            brand_id=brand.id,
            category_id=category.id,
        )
        for name, description, price, stock in [
            ("Laptop Pro", "14 inch", 999.0, 5),
            ("Gaming Laptop", "RGB keyboard", 1499.0, 2),
            ("Phone Mini", "5.4 inch", 699.0, 5),
        ]
    ]
    db_session.add_all(products)
    db_session.commit()
    return products


class TestNormalizeCriteria:
    """Tests for criteria filtering and coercion."""

    def test_unsupported_fields_ignored(self, entity_specs):
        spec = entity_specs["product"]

        assert normalize_criteria(spec, {"colour": "red", "name": "Laptop"}) == {"name": "Laptop"}

    def test_numeric_values_coerced(self, entity_specs):
        spec = entity_specs["product"]

        normalized = normalize_criteria(spec, {"price": "999", "stock_quantity": " 5 "})

        assert normalized == {"price": 999.0, "stock_quantity": 5}

    def test_uncoercible_values_dropped(self, entity_specs):
        spec = entity_specs["product"]

        normalized = normalize_criteria(
            spec,
            {"price": "cheap", "brand_id": "3.5", "stock_quantity": True},
        )

        assert normalized == {}

    def test_blank_text_dropped(self, entity_specs):
        assert normalize_criteria(entity_specs["brand"], {"name": "   "}) == {}

    def test_out_of_range_integers_dropped(self, entity_specs):
        spec = entity_specs["product"]

        normalized = normalize_criteria(spec, {
            "brand_id": str(0xFFFFFFFF + 1),
            "category_id": 10**20,
            "stock_quantity": str(2**63),
            "price": 10**400,
        })

        assert normalized == {}

    def test_integer_bounds_are_inclusive(self, entity_specs):
        spec = entity_specs["product"]

        normalized = normalize_criteria(spec, {"brand_id": "4294967295", "stock_quantity": 2**63 - 1})

        assert normalized == {"brand_id": 0xFFFFFFFF, "stock_quantity": 2**63 - 1}


class TestBuildSearchQuery:
    """Tests for the generated queries."""

    def test_empty_criteria_matches_every_live_row(self, db_session, entity_specs, catalog):
        results = build_search_query(db_session, entity_specs["product"], {}).all()

        assert len(results) == 3

    def test_fully_dropped_criteria_matches_every_live_row(self, db_session, entity_specs, catalog):
        results = build_search_query(
            db_session, entity_specs["product"], {"price": "cheap", "colour": "red"}
        ).all()

        assert len(results) == 3

    def test_substring_match(self, db_session, entity_specs, catalog):
        results = build_search_query(db_session, entity_specs["product"], {"name": "Laptop"}).all()

        assert {p.name for p in results} == {"Laptop Pro", "Gaming Laptop"}

    def test_criteria_are_anded(self, db_session, entity_specs, catalog):
        results = build_search_query(
            db_session, entity_specs["product"], {"name": "Laptop", "stock_quantity": "5"}
        ).all()

        assert [p.name for p in results] == ["Laptop Pro"]

    def test_exact_numeric_match(self, db_session, entity_specs, catalog):
        results = build_search_query(db_session, entity_specs["product"], {"price": "699"}).all()

        assert [p.name for p in results] == ["Phone Mini"]

    def test_zero_matches(self, db_session, entity_specs, catalog):
        results = build_search_query(db_session, entity_specs["product"], {"name": "Toaster"}).all()

        assert results == []

    def test_soft_deleted_rows_excluded(self, db_session, entity_specs, catalog):
        catalog[0].deleted_at = datetime.utcnow()
        db_session.commit()

        results = build_search_query(db_session, entity_specs["product"], {}).all()

        assert len(results) == 2

    def test_like_wildcards_are_literal(self, db_session, entity_specs, catalog):
        results = build_search_query(db_session, entity_specs["product"], {"name": "%"}).all()

        assert results == []

    def test_status_fields_match_case_insensitively(self, db_session, entity_specs, order):
        db_session.add(Payment(
            id=generate_id(),
            order_id=order.id,
            payment_method="credit card",
            amount=1998.0,
            payment_date="2024-03-02",
            status="completed",
        ))
        db_session.commit()

        spec = entity_specs["payment"]

        assert len(build_search_query(db_session, spec, {"payment_method": "CREDIT"}).all()) == 1
        assert len(build_search_query(db_session, spec, {"status": "Complete"}).all()) == 1
        assert build_search_query(db_session, spec, {"status": "refund"}).all() == []
