"""
Collaborator contracts for the order workflow.

The order creator only talks to these protocols; the psycopg2 repositories
in this package implement them against PostgreSQL and the test suite
implements them in memory.
"""
from typing import AsyncContextManager, List, Optional, Protocol, Sequence

from app.domain.customer import Customer
from app.domain.order import Order, OrderCreate
from app.domain.product import Product, StockUpdate


class CustomerLookup(Protocol):
    """Resolves customer identifiers to customer records."""

    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        ...


class ProductCatalog(Protocol):
    """Batch reads of current price/stock and batch stock writes."""

    async def find_all_by_id(self, product_ids: Sequence[str]) -> List[Product]:
        """Return the products that exist; unknown ids are simply absent."""
        ...

    async def update_quantity(self, updates: Sequence[StockUpdate]) -> None:
        ...


class OrderStore(Protocol):
    """Persists orders together with their lines."""

    async def create(self, data: OrderCreate) -> Order:
        """Persist one order and all of its lines as a single unit."""
        ...

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        ...


class TransactionBoundary(Protocol):
    """Opens a transaction spanning order persistence and stock decrement."""

    def transaction(self) -> AsyncContextManager[None]:
        ...
