"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities
and the typed outcomes of the order workflow.
"""
from app.domain.customer import Customer
from app.domain.product import Product, StockUpdate
from app.domain.order import Order, OrderCreate, OrderLine, OrderLineRequest
from app.domain.errors import (
    CustomerNotFound,
    InsufficientStock,
    NotFoundError,
    OrderCreated,
    OrderCreationError,
    OrderFailure,
    OrderRejected,
    OrderResult,
    ProductNotFound,
    ValidationError,
)

__all__ = [
    'Customer',
    'Product',
    'StockUpdate',
    'Order',
    'OrderCreate',
    'OrderLine',
    'OrderLineRequest',
    'OrderFailure',
    'NotFoundError',
    'ValidationError',
    'CustomerNotFound',
    'ProductNotFound',
    'InsufficientStock',
    'OrderCreationError',
    'OrderCreated',
    'OrderRejected',
    'OrderResult',
]
