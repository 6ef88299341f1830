"""
Product Repository - Data Access Layer for Products

Batch reads of price and stock, and batch stock writes, for the order
workflow. Returns Product domain models, not raw dictionaries.
"""
from typing import List, Sequence

from app.core.database import PostgresSession
from app.domain.product import Product, StockUpdate


class ProductRepository:
    """
    Repository for Product data access

    Implements the ProductCatalog contract. All SQL queries for products
    are centralized here.
    """

    def __init__(self, session: PostgresSession):
        self.session = session

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Helper method to map database row to Product domain model."""
        return Product(
            id=str(row['id']),
            name=row['name'],
            price=row['price'],
            quantity=row['quantity'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    async def find_all_by_id(self, product_ids: Sequence[str]) -> List[Product]:
        """
        Find all products whose ID is in product_ids

        Args:
            product_ids: Product IDs to look up

        Returns:
            Products found. Unknown IDs are not reported.
        """
        if not product_ids:
            return []
        return await self.session.run(self._find_all_by_id, list(product_ids))

    def _find_all_by_id(self, product_ids: List[str]) -> List[Product]:
        with self.session.cursor() as cursor:
            cursor.execute("""
                SELECT id, name, price, quantity, created_at, updated_at
                FROM products
                WHERE id = ANY(%s)
            """, (product_ids,))

            rows = cursor.fetchall()

        return [self._map_row_to_product(row) for row in rows]

    async def update_quantity(self, updates: Sequence[StockUpdate]) -> None:
        """
        Write new absolute stock figures

        Updates are applied in the given order, so when the same product
        appears twice the last update wins.

        Args:
            updates: New quantity per product
        """
        if not updates:
            return
        await self.session.run(self._update_quantity, list(updates))

    def _update_quantity(self, updates: List[StockUpdate]) -> None:
        with self.session.cursor() as cursor:
            cursor.executemany("""
                UPDATE products
                SET quantity = %s, updated_at = now()
                WHERE id = %s
            """, [(update.quantity, update.product_id) for update in updates])
