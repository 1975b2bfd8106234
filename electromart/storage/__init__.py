"""
Storage Module for ElectroMart

Relational persistence for the catalog:
- SQLAlchemy models for the nine entities
- Declarative entity specs (field rules, search fields)
- Setters and existence checks
- Search builder and the generic entity repository
"""

from electromart.storage.models import (
    Base,
    User,
    Brand,
    Category,
    Product,
    Order,
    OrderItem,
    Payment,
    ShippingDetails,
    Review,
    generate_id,
)
from electromart.storage.specs import (
    EntitySpec,
    FieldRule,
    SearchField,
    Match,
    build_entity_specs,
)
from electromart.storage.setters import (
    ValidationFailure,
    exists,
    set_field,
    apply_rules,
    validate_payload,
)
from electromart.storage.search import (
    build_search_query,
    normalize_criteria,
)
from electromart.storage.repository import EntityRepository

__all__ = [
    # Models
    "Base",
    "User",
    "Brand",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "Payment",
    "ShippingDetails",
    "Review",
    "generate_id",
    # Specs
    "EntitySpec",
    "FieldRule",
    "SearchField",
    "Match",
    "build_entity_specs",
    # Setters
    "ValidationFailure",
    "exists",
    "set_field",
    "apply_rules",
    "validate_payload",
    # Search
    "build_search_query",
    "normalize_criteria",
    # Repository
    "EntityRepository",
]
