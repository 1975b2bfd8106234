"""
Entity Specs for ElectroMart

Declarative per-entity descriptors that drive the generic repository:
- Ordered field rules (validator or foreign-key target + fixed error message)
- Searchable fields and their matching policy
- Human-readable names used in error messages

Design Decisions:
1. One engine, nine descriptors: the repository never branches on entity type
2. Rule order is validation order; the first failing rule names the error
3. Vocabularies (statuses, methods, roles) are injected, not module globals
"""

from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Optional

from electromart.validation import (
    DESCRIPTION_MAX_LENGTH,
    MAX_INTEGER,
    MAX_RECORD_ID,
    Vocabulary,
    check_string,
    check_int,
    check_float,
    check_rating,
    check_email,
    check_date,
    check_choice,
    check_password,
    check_phone,
)
from electromart.storage.models import (
    User,
    Brand,
    Category,
    Product,
    Order,
    OrderItem,
    Payment,
    ShippingDetails,
    Review,
)


class Match(str, Enum):
    """How a search criterion is compared against its column."""
    EXACT = "exact"
    CONTAINS = "contains"
    CONTAINS_LOWER = "contains_lower"


@dataclass(frozen=True)
class FieldRule:
    """
    Validate-then-assign rule for one entity field.

    Exactly one of `check` or `references` is set: plain fields are
    validated by a predicate, foreign keys by an existence lookup
    against the referenced model.
    """

    name: str
    message: str
    check: Optional[Callable[[Any], bool]] = None
    references: Optional[type] = None

    # Applied to the accepted value before assignment (e.g. hashing)
    transform: Optional[Callable[[Any], Any]] = None

    # A missing (None) value leaves the field as it is
    optional: bool = False
    optional_on_update: bool = False

    # Substituted for a missing value on create
    default_on_create: Any = None

    @property
    def is_foreign_key(self) -> bool:
        return self.references is not None


@dataclass(frozen=True)
class SearchField:
    """A field accepted by the search builder."""

    name: str
    kind: type = str
    match: Match = Match.EXACT

    # Larger integer criteria cannot match a stored value and are dropped
    max_value: int = MAX_INTEGER


@dataclass(frozen=True)
class EntitySpec:
    """Everything the generic engine needs to know about one entity."""

    key: str
    label: str
    collection: str
    model: type
    rules: tuple[FieldRule, ...]
    search_fields: tuple[SearchField, ...]

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    @property
    def empty_search_message(self) -> str:
        return f"No {self.collection} found"

    def rule(self, name: str) -> Optional[FieldRule]:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def search_field(self, name: str) -> Optional[SearchField]:
        for search_field in self.search_fields:
            if search_field.name == name:
                return search_field
        return None


# =============================================================================
# Registry
# =============================================================================

_short_text = check_string
_long_text = partial(check_string, max_length=DESCRIPTION_MAX_LENGTH)


def build_entity_specs(
    vocabulary: Optional[Vocabulary] = None,
    hash_password: Optional[Callable[[str], str]] = None,
) -> dict[str, EntitySpec]:
    """
    Build the spec registry for all nine entities.

    Args:
        vocabulary: Accepted literal sets for enumerated fields.
        hash_password: One-way transform applied to accepted passwords.

    Returns:
        Mapping of entity key -> EntitySpec.
    """
    vocabulary = vocabulary or Vocabulary()

    user = EntitySpec(
        key="user",
        label="User",
        collection="users",
        model=User,
        rules=(
            FieldRule("first_name", "first name is wrongly formatted", check=_short_text),
            FieldRule("last_name", "last name is wrongly formatted", check=_short_text),
            FieldRule("username", "invalid username", check=_short_text),
            FieldRule(
                "password",
                "invalid password: at least 8 characters with an uppercase letter, "
                "a lowercase letter, a number and a special character",
                check=check_password,
                transform=hash_password,
                optional_on_update=True,
            ),
            FieldRule("email", "invalid email", check=check_email),
            FieldRule("address", "invalid address", check=_short_text),
            FieldRule("mobile", "invalid mobile", check=check_phone, optional=True),
            FieldRule(
                "role",
                "role is not expected",
                check=partial(check_choice, choices=vocabulary.user_roles),
                optional_on_update=True,
                default_on_create=vocabulary.user_roles[0],
            ),
        ),
        search_fields=(
            SearchField("username", str, Match.CONTAINS),
            SearchField("email", str, Match.CONTAINS),
            SearchField("first_name", str, Match.CONTAINS),
            SearchField("last_name", str, Match.CONTAINS),
            SearchField("address", str, Match.CONTAINS),
            SearchField("role", str, Match.EXACT),
        ),
    )

    brand = EntitySpec(
        key="brand",
        label="Brand",
        collection="brands",
        model=Brand,
        rules=(
            FieldRule("name", "name is wrongly formatted", check=_short_text),
            FieldRule(
                "description",
                "description is wrongly formatted",
                check=_long_text,
                optional=True,
            ),
        ),
        search_fields=(
            SearchField("name", str, Match.CONTAINS),
            SearchField("description", str, Match.CONTAINS),
        ),
    )

    category = EntitySpec(
        key="category",
        label="Category",
        collection="categories",
        model=Category,
        rules=(
            FieldRule("name", "name is wrongly formatted", check=_short_text),
            FieldRule(
                "description",
                "description is wrongly formatted",
                check=_long_text,
                optional=True,
            ),
        ),
        search_fields=(
            SearchField("name", str, Match.CONTAINS),
            SearchField("description", str, Match.CONTAINS),
        ),
    )

    product = EntitySpec(
        key="product",
        label="Product",
        collection="products",
        model=Product,
        rules=(
            FieldRule("name", "name is wrongly formatted", check=_short_text),
            FieldRule(
                "description",
                "description is wrongly formatted",
                check=_long_text,
                optional=True,
            ),
            FieldRule("price", "invalid price", check=check_float),
            FieldRule("stock_quantity", "invalid stock quantity", check=check_int),
            FieldRule("brand_id", "invalid brand_id or not existing", references=Brand),
            FieldRule("category_id", "invalid category_id or not existing", references=Category),
        ),
        search_fields=(
            SearchField("name", str, Match.CONTAINS),
            SearchField("description", str, Match.CONTAINS),
            SearchField("price", float),
            SearchField("stock_quantity", int),
            SearchField("brand_id", int, max_value=MAX_RECORD_ID),
            SearchField("category_id", int, max_value=MAX_RECORD_ID),
        ),
    )

    order = EntitySpec(
        key="order",
        label="Order",
        collection="orders",
        model=Order,
        rules=(
            FieldRule("user_id", "invalid user_id or not existing", references=User),
            FieldRule("order_date", "order date is not expected", check=check_date),
            FieldRule("total_amount", "invalid amount", check=check_float),
            FieldRule(
                "status",
                "order status is not expected",
                check=partial(check_choice, choices=vocabulary.order_statuses),
            ),
        ),
        search_fields=(
            SearchField("user_id", int, max_value=MAX_RECORD_ID),
            SearchField("order_date", str),
            SearchField("total_amount", float),
            SearchField("status", str, Match.CONTAINS_LOWER),
        ),
    )

    order_item = EntitySpec(
        key="order_item",
        label="Order item",
        collection="order items",
        model=OrderItem,
        rules=(
            FieldRule("order_id", "invalid order_id or not existing", references=Order),
            FieldRule("product_id", "invalid product_id or not existing", references=Product),
            FieldRule("quantity", "invalid quantity", check=check_int),
            FieldRule("subtotal", "invalid subtotal", check=check_float),
        ),
        search_fields=(
            SearchField("order_id", int, max_value=MAX_RECORD_ID),
            SearchField("product_id", int, max_value=MAX_RECORD_ID),
            SearchField("quantity", int),
            SearchField("subtotal", float),
        ),
    )

    payment = EntitySpec(
        key="payment",
        label="Payment",
        collection="payments",
        model=Payment,
        rules=(
            FieldRule("order_id", "invalid order_id or not existing", references=Order),
            FieldRule(
                "payment_method",
                "payment method is not expected",
                check=partial(check_choice, choices=vocabulary.payment_methods),
            ),
            FieldRule("amount", "invalid amount", check=check_float),
            FieldRule("payment_date", "invalid payment date", check=check_date),
            FieldRule(
                "status",
                "payment status is not expected",
                check=partial(check_choice, choices=vocabulary.payment_statuses),
            ),
        ),
        search_fields=(
            SearchField("order_id", int, max_value=MAX_RECORD_ID),
            SearchField("payment_method", str, Match.CONTAINS_LOWER),
            SearchField("amount", float),
            SearchField("payment_date", str),
            SearchField("status", str, Match.CONTAINS_LOWER),
        ),
    )

    shipping_details = EntitySpec(
        key="shipping_details",
        label="Shipping detail",
        collection="shipping details",
        model=ShippingDetails,
        rules=(
            FieldRule("order_id", "invalid order id or not existing", references=Order),
            FieldRule("address", "invalid address", check=_short_text),
            FieldRule("shipping_date", "shipping date is not expected", check=check_date),
            FieldRule("estimated_arrival", "estimated arrival is not expected", check=check_date),
            FieldRule(
                "status",
                "status is not valid",
                check=partial(check_choice, choices=vocabulary.shipping_statuses),
            ),
        ),
        search_fields=(
            SearchField("order_id", int, max_value=MAX_RECORD_ID),
            SearchField("address", str, Match.CONTAINS),
            SearchField("shipping_date", str),
            SearchField("estimated_arrival", str),
            SearchField("status", str, Match.CONTAINS_LOWER),
        ),
    )

    review = EntitySpec(
        key="review",
        label="Review",
        collection="reviews",
        model=Review,
        rules=(
            FieldRule("product_id", "invalid product_id or not existing", references=Product),
            FieldRule("user_id", "invalid user_id or not existing", references=User),
            FieldRule("rating", "the rating must be between 0 and 5", check=check_rating),
            FieldRule("comment", "the comment is not valid", check=_short_text),
            FieldRule("review_date", "review date is not expected", check=check_date),
        ),
        search_fields=(
            SearchField("product_id", int, max_value=MAX_RECORD_ID),
            SearchField("user_id", int, max_value=MAX_RECORD_ID),
            SearchField("rating", int),
            SearchField("comment", str, Match.CONTAINS),
            SearchField("review_date", str),
        ),
    )

    specs = (
        user,
        brand,
        category,
        product,
        order,
        order_item,
        payment,
        shipping_details,
        review,
    )
    return {spec.key: spec for spec in specs}
