"""
Database models for ElectroMart.

Every table shares the same bookkeeping columns:
- a 32-bit surrogate id assigned by the application (not the database)
- created/updated timestamps
- a nullable deleted_at marker; rows carrying it are invisible to queries
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> int:
    """Derive an unsigned 32-bit identifier from a random UUID."""
    return int.from_bytes(uuid.uuid4().bytes[:4], "big")


class CatalogRecord:
    """Columns common to every entity."""

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, index=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class User(CatalogRecord, Base):
    __tablename__ = "users"

    username = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # hash, never plaintext
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(255))
    last_name = Column(String(255))
    address = Column(String(255))
    mobile = Column(String(11))
    role = Column(String(50), default="regular")


class Brand(CatalogRecord, Base):
    __tablename__ = "brands"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)


class Category(CatalogRecord, Base):
    __tablename__ = "categories"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)


class Product(CatalogRecord, Base):
    __tablename__ = "products"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    price = Column(Float, nullable=False, default=0.0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    brand_id = Column(BigInteger, ForeignKey("brands.id"), index=True)
    category_id = Column(BigInteger, ForeignKey("categories.id"), index=True)


class Order(CatalogRecord, Base):
    __tablename__ = "orders"

    user_id = Column(BigInteger, ForeignKey("users.id"), index=True)
    order_date = Column(String(10))
    total_amount = Column(Float, nullable=False, default=0.0)
    status = Column(String(50))


class OrderItem(CatalogRecord, Base):
    __tablename__ = "order_items"

    order_id = Column(BigInteger, ForeignKey("orders.id"), index=True)
    product_id = Column(BigInteger, ForeignKey("products.id"), index=True)
    quantity = Column(Integer, nullable=False, default=0)
    subtotal = Column(Float, nullable=False, default=0.0)


class Payment(CatalogRecord, Base):
    __tablename__ = "payments"

    order_id = Column(BigInteger, ForeignKey("orders.id"), index=True)
    payment_method = Column(String(50))
    amount = Column(Float, nullable=False, default=0.0)
    payment_date = Column(String(10))
    status = Column(String(50))


class ShippingDetails(CatalogRecord, Base):
    __tablename__ = "shipping_details"

    order_id = Column(BigInteger, ForeignKey("orders.id"), index=True)
    address = Column(String(255))
    shipping_date = Column(String(10))
    estimated_arrival = Column(String(10))
    status = Column(String(50))


class Review(CatalogRecord, Base):
    __tablename__ = "reviews"

    product_id = Column(BigInteger, ForeignKey("products.id"), index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), index=True)
    rating = Column(Integer, nullable=False, default=0)
    comment = Column(String(255))
    review_date = Column(String(10))
