"""
Order Repository - Data Access Layer for Orders

Persists orders together with their lines (orders + orders_products) and
reads them back as Order domain models.
"""
from typing import List, Optional

from psycopg2.extras import execute_values

from app.core.database import PostgresSession
from app.domain.customer import Customer
from app.domain.order import Order, OrderCreate, OrderLine


class OrderRepository:
    """
    Repository for Order data access

    Implements the OrderStore contract.
    """

    def __init__(self, session: PostgresSession):
        self.session = session

    async def create(self, data: OrderCreate) -> Order:
        """
        Insert an order and all of its lines

        Both inserts share one cursor block, so outside of an explicit
        transaction they are committed together or not at all.

        Args:
            data: Customer and price-captured lines

        Returns:
            Persisted Order with generated ID and timestamps
        """
        return await self.session.run(self._create, data)

    def _create(self, data: OrderCreate) -> Order:
        with self.session.cursor() as cursor:
            cursor.execute("""
                INSERT INTO orders (customer_id)
                VALUES (%s)
                RETURNING id, created_at, updated_at
            """, (data.customer.id,))
            order_row = cursor.fetchone()

            if data.lines:
                execute_values(cursor, """
                    INSERT INTO orders_products (order_id, product_id, position, price, quantity)
                    VALUES %s
                """, [
                    (order_row['id'], line.product_id, position, line.price, line.quantity)
                    for position, line in enumerate(data.lines)
                ])

        return Order(
            id=str(order_row['id']),
            customer=data.customer,
            lines=list(data.lines),
            created_at=order_row['created_at'],
            updated_at=order_row.get('updated_at')
        )

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID, with customer and lines

        Args:
            order_id: Order ID

        Returns:
            Order or None if not found
        """
        return await self.session.run(self._find_by_id, order_id)

    def _find_by_id(self, order_id: str) -> Optional[Order]:
        with self.session.cursor() as cursor:
            cursor.execute("""
                SELECT
                    o.id, o.created_at, o.updated_at,
                    c.id as customer_id,
                    c.name as customer_name,
                    c.email as customer_email,
                    c.created_at as customer_created_at,
                    c.updated_at as customer_updated_at
                FROM orders o
                JOIN customers c ON c.id = o.customer_id
                WHERE o.id = %s
            """, (order_id,))
            order_row = cursor.fetchone()

            if not order_row:
                return None

            cursor.execute("""
                SELECT product_id, quantity, price
                FROM orders_products
                WHERE order_id = %s
                ORDER BY position
            """, (order_id,))
            line_rows = cursor.fetchall()

        return self._map_rows_to_order(order_row, line_rows)

    @staticmethod
    def _map_rows_to_order(order_row: dict, line_rows: List[dict]) -> Order:
        """Helper method to map order + line rows to the Order domain model."""
        customer = Customer(
            id=str(order_row['customer_id']),
            name=order_row['customer_name'],
            email=order_row.get('customer_email'),
            created_at=order_row.get('customer_created_at'),
            updated_at=order_row.get('customer_updated_at')
        )
        lines = [
            OrderLine(
                product_id=str(row['product_id']),
                quantity=row['quantity'],
                price=row['price']
            )
            for row in line_rows
        ]
        return Order(
            id=str(order_row['id']),
            customer=customer,
            lines=lines,
            created_at=order_row['created_at'],
            updated_at=order_row.get('updated_at')
        )
