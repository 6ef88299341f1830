"""
Order Creation Service
Places a customer order: checks stock, captures prices, persists the order
and takes the ordered units out of stock.

Steps (each one short-circuits the rest on failure):
1. Resolve customer
2. Batch-fetch requested products
3. Validate every line in request order (first failure wins)
4. Build order lines with the current price of each product
5. Persist order with its lines
6. Decrement stock from the snapshot read in step 2

Steps 5 and 6 share one transaction when a TransactionBoundary is given.
"""
import logging
from collections import Counter
from contextlib import nullcontext
from typing import Dict, List, Optional, Sequence

from app.core.config import StockCheckMode, settings
from app.domain.customer import Customer
from app.domain.errors import (
    CustomerNotFound,
    InsufficientStock,
    OrderCreated,
    OrderFailure,
    OrderRejected,
    OrderResult,
    ProductNotFound,
)
from app.domain.order import Order, OrderCreate, OrderLine, OrderLineRequest
from app.domain.product import Product, StockUpdate
from app.repositories.interfaces import (
    CustomerLookup,
    OrderStore,
    ProductCatalog,
    TransactionBoundary,
)

logger = logging.getLogger(__name__)


class OrderCreator:
    """
    Service for creating orders

    Handles:
    - Customer resolution
    - Stock validation
    - Price snapshot on order lines
    - Order persistence
    - Stock decrement
    """

    def __init__(
        self,
        customers: CustomerLookup,
        products: ProductCatalog,
        orders: OrderStore,
        transactions: Optional[TransactionBoundary] = None,
        stock_check_mode: Optional[StockCheckMode] = None,
    ):
        self.customers = customers
        self.products = products
        self.orders = orders
        self.transactions = transactions
        self.stock_check_mode = stock_check_mode or settings.STOCK_CHECK_MODE

    async def execute(self, customer_id: str, lines: Sequence[OrderLineRequest]) -> OrderResult:
        """
        Create an order for a customer

        Args:
            customer_id: Customer placing the order
            lines: Requested products and quantities, in order

        Returns:
            OrderCreated with the persisted order, or OrderRejected with the
            first failure found. A rejected request leaves no side effects.
        """
        customer = await self.customers.find_by_id(customer_id)
        if customer is None:
            return self._reject(CustomerNotFound(customer_id=customer_id))

        products = await self._find_products(lines)

        failure = self._validate(lines, products)
        if failure is not None:
            return self._reject(failure)

        order_lines = self._build_lines(lines, products)
        updates = self._stock_updates(lines, products)

        order = await self._persist(customer, order_lines, updates)

        logger.info(
            f"Order {order.id} created for customer {customer.id}: "
            f"{order.item_count} lines, {order.total_quantity} units, total {order.total}"
        )
        return OrderCreated(order=order)

    async def _find_products(self, lines: Sequence[OrderLineRequest]) -> Dict[str, Product]:
        """Fetch every distinct requested product in one call, keyed by ID"""
        product_ids = list(dict.fromkeys(line.product_id for line in lines))
        found = await self.products.find_all_by_id(product_ids)
        return {product.id: product for product in found}

    def _validate(
        self,
        lines: Sequence[OrderLineRequest],
        products: Dict[str, Product],
    ) -> Optional[OrderFailure]:
        """
        Return the failure of the first invalid line, or None

        In cumulative mode a line is checked against what earlier lines of the
        same product left over, and InsufficientStock.available reports that
        remainder rather than the recorded stock.
        """
        remaining = {product_id: product.quantity for product_id, product in products.items()}

        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                return ProductNotFound(product_id=line.product_id)

            if self.stock_check_mode == StockCheckMode.PER_LINE:
                available = product.quantity
            else:
                available = remaining[line.product_id]

            if line.quantity > available:
                return InsufficientStock(
                    product_id=product.id,
                    product_name=product.name,
                    requested=line.quantity,
                    available=available,
                )

            remaining[line.product_id] = available - line.quantity

        return None

    @staticmethod
    def _build_lines(
        lines: Sequence[OrderLineRequest],
        products: Dict[str, Product],
    ) -> List[OrderLine]:
        return [
            OrderLine(
                product_id=line.product_id,
                quantity=line.quantity,
                price=products[line.product_id].price,
            )
            for line in lines
        ]

    def _stock_updates(
        self,
        lines: Sequence[OrderLineRequest],
        products: Dict[str, Product],
    ) -> List[StockUpdate]:
        """New stock figures computed from the snapshot, never re-read"""
        if self.stock_check_mode == StockCheckMode.PER_LINE:
            # One update per line; repeated products overwrite each other
            return [
                StockUpdate(
                    product_id=line.product_id,
                    quantity=products[line.product_id].quantity - line.quantity,
                )
                for line in lines
            ]

        ordered = Counter()
        for line in lines:
            ordered[line.product_id] += line.quantity

        return [
            StockUpdate(
                product_id=product_id,
                quantity=products[product_id].quantity - quantity,
            )
            for product_id, quantity in ordered.items()
        ]

    async def _persist(
        self,
        customer: Customer,
        order_lines: List[OrderLine],
        updates: List[StockUpdate],
    ) -> Order:
        transaction = self.transactions.transaction() if self.transactions else nullcontext()

        async with transaction:
            try:
                order = await self.orders.create(OrderCreate(customer=customer, lines=order_lines))
            except Exception as e:
                logger.error(f"Error persisting order for customer {customer.id}: {e}")
                raise

            try:
                await self.products.update_quantity(updates)
            except Exception as e:
                if self.transactions is None:
                    logger.error(f"Order {order.id} was persisted but stock was not decremented: {e}")
                else:
                    logger.error(f"Error decrementing stock for order {order.id}: {e}")
                raise

        return order

    @staticmethod
    def _reject(failure: OrderFailure) -> OrderRejected:
        logger.warning(f"Order rejected ({failure.code}): {failure.message}")
        return OrderRejected(error=failure)
