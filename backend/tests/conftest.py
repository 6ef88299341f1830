"""
Pytest fixtures and configuration for the Retail Orders backend tests

This file provides shared fixtures that can be used across all test modules:
in-memory implementations of the order workflow collaborators and sample
catalog data.
"""
import os
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from dotenv import load_dotenv

from app.domain.customer import Customer
from app.domain.order import Order
from app.domain.product import Product

# Load environment variables for tests
load_dotenv()


class InMemoryCustomers:
    """CustomerLookup backed by a dict"""

    def __init__(self, customers=()):
        self.customers = {customer.id: customer for customer in customers}
        self.lookups = []

    async def find_by_id(self, customer_id):
        self.lookups.append(customer_id)
        return self.customers.get(customer_id)


class InMemoryCatalog:
    """ProductCatalog backed by a dict, recording every call"""

    def __init__(self, products=()):
        self.products = {product.id: product for product in products}
        self.find_calls = []
        self.update_calls = []

    async def find_all_by_id(self, product_ids):
        self.find_calls.append(list(product_ids))
        return [self.products[pid] for pid in product_ids if pid in self.products]

    async def update_quantity(self, updates):
        self.update_calls.append(list(updates))
        for update in updates:
            product = self.products[update.product_id]
            self.products[update.product_id] = product.model_copy(update={'quantity': update.quantity})

    def stock(self, product_id):
        return self.products[product_id].quantity

    def set_price(self, product_id, price):
        product = self.products[product_id]
        self.products[product_id] = product.model_copy(update={'price': Decimal(price)})


class InMemoryOrders:
    """OrderStore backed by a dict"""

    def __init__(self):
        self.orders = {}

    async def create(self, data):
        order = Order(
            id=str(uuid.uuid4()),
            customer=data.customer,
            lines=list(data.lines),
            created_at=datetime.now(timezone.utc)
        )
        self.orders[order.id] = order
        return order

    async def find_by_id(self, order_id):
        return self.orders.get(order_id)


class InMemoryTransactions:
    """TransactionBoundary restoring catalog and orders on rollback"""

    def __init__(self, catalog, orders):
        self.catalog = catalog
        self.orders = orders
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self):
        products = dict(self.catalog.products)
        orders = dict(self.orders.orders)
        try:
            yield
        except Exception:
            self.catalog.products = products
            self.orders.orders = orders
            self.rollbacks += 1
            raise
        else:
            self.commits += 1


@pytest.fixture
def sample_customer():
    """Provides the customer C1"""
    return Customer(id="C1", name="Ana Rojas", email="ana@example.com")


@pytest.fixture
def sample_products():
    """
    Provides sample catalog products

    P1: 10.00, 5 units in stock
    P2: 2.50, 10 units in stock
    """
    return [
        Product(id="P1", name="Coffee Beans 1kg", price=Decimal("10.00"), quantity=5),
        Product(id="P2", name="Paper Filters", price=Decimal("2.50"), quantity=10),
    ]


@pytest.fixture
def customers(sample_customer):
    return InMemoryCustomers([sample_customer])


@pytest.fixture
def catalog(sample_products):
    return InMemoryCatalog(sample_products)


@pytest.fixture
def orders():
    return InMemoryOrders()


@pytest.fixture
def transactions(catalog, orders):
    return InMemoryTransactions(catalog, orders)


@pytest.fixture(scope="session")
def database_url():
    """
    Provides the database URL for integration tests

    Scope: session (created once per test session)
    """
    url = os.getenv("DATABASE_URL")
    if not url:
        pytest.skip("DATABASE_URL not configured")
    return url
