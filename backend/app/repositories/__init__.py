"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from app.repositories.customer_repository import CustomerRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.interfaces import (
    CustomerLookup,
    OrderStore,
    ProductCatalog,
    TransactionBoundary,
)

__all__ = [
    'CustomerRepository',
    'ProductRepository',
    'OrderRepository',
    'CustomerLookup',
    'ProductCatalog',
    'OrderStore',
    'TransactionBoundary',
]
