"""
Unit tests for ProductRepository

These tests validate repository logic without requiring a database connection.
"""
import asyncio
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from app.core.database import PostgresSession
from app.domain.product import Product, StockUpdate
from app.repositories.product_repository import ProductRepository


def make_session():
    mock_conn = MagicMock()
    mock_cursor = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    return PostgresSession(mock_conn), mock_conn, mock_cursor


class TestProductRepository:
    """Test ProductRepository methods"""

    def test_find_all_by_id_returns_products(self):
        """Test find_all_by_id maps rows to Product domain models"""
        # Arrange
        session, mock_conn, mock_cursor = make_session()
        mock_cursor.fetchall.return_value = [
            {
                'id': 'P1',
                'name': 'Coffee Beans 1kg',
                'price': Decimal('10.00'),
                'quantity': 5,
                'created_at': datetime.now(),
                'updated_at': None
            },
            {
                'id': 'P2',
                'name': 'Paper Filters',
                'price': Decimal('2.50'),
                'quantity': 10,
                'created_at': datetime.now(),
                'updated_at': None
            }
        ]

        # Act
        repo = ProductRepository(session)
        products = asyncio.run(repo.find_all_by_id(['P1', 'P2', 'X1']))

        # Assert
        assert len(products) == 2
        assert all(isinstance(p, Product) for p in products)
        assert products[0].id == 'P1'
        assert products[0].price == Decimal('10.00')
        assert products[1].quantity == 10

        # IDs are passed as one array parameter
        sql, params = mock_cursor.execute.call_args[0]
        assert 'ANY(%s)' in sql
        assert params == (['P1', 'P2', 'X1'],)
        mock_cursor.close.assert_called_once()
        mock_conn.commit.assert_called_once()

    def test_find_all_by_id_with_no_ids_skips_query(self):
        session, mock_conn, mock_cursor = make_session()

        products = asyncio.run(ProductRepository(session).find_all_by_id([]))

        assert products == []
        mock_conn.cursor.assert_not_called()

    def test_update_quantity_writes_each_update_in_order(self):
        session, mock_conn, mock_cursor = make_session()

        repo = ProductRepository(session)
        asyncio.run(repo.update_quantity([
            StockUpdate(product_id='P1', quantity=2),
            StockUpdate(product_id='P2', quantity=0),
        ]))

        sql, params = mock_cursor.executemany.call_args[0]
        assert 'UPDATE products' in sql
        assert params == [(2, 'P1'), (0, 'P2')]
        mock_conn.commit.assert_called_once()

    def test_update_quantity_inside_transaction_does_not_commit(self):
        session, mock_conn, mock_cursor = make_session()
        repo = ProductRepository(session)

        async def update_in_transaction():
            async with session.transaction():
                await repo.update_quantity([StockUpdate(product_id='P1', quantity=2)])
                assert mock_conn.commit.call_count == 0

        asyncio.run(update_in_transaction())

        mock_conn.commit.assert_called_once()

    def test_update_quantity_with_no_updates_skips_query(self):
        session, mock_conn, mock_cursor = make_session()

        asyncio.run(ProductRepository(session).update_quantity([]))

        mock_conn.cursor.assert_not_called()
