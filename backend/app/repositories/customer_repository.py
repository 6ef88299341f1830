"""
Customer Repository - Data Access Layer for Customers

Read-only lookups of customers for the order workflow.
"""
from typing import Optional

from app.core.database import PostgresSession
from app.domain.customer import Customer


class CustomerRepository:
    """
    Repository for Customer data access

    Implements the CustomerLookup contract.
    """

    def __init__(self, session: PostgresSession):
        self.session = session

    @staticmethod
    def _map_row_to_customer(row: dict) -> Customer:
        """Helper method to map database row to Customer domain model."""
        return Customer(
            id=str(row['id']),
            name=row['name'],
            email=row.get('email'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Find customer by ID

        Args:
            customer_id: Customer ID

        Returns:
            Customer or None if not found
        """
        return await self.session.run(self._find_by_id, customer_id)

    def _find_by_id(self, customer_id: str) -> Optional[Customer]:
        with self.session.cursor() as cursor:
            cursor.execute("""
                SELECT id, name, email, created_at, updated_at
                FROM customers
                WHERE id = %s
            """, (customer_id,))

            row = cursor.fetchone()

        if not row:
            return None

        return self._map_row_to_customer(row)
