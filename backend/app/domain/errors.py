"""
Order Creation Outcomes

Failures of the order workflow are values, not exceptions: the order
creator returns either OrderCreated or OrderRejected and callers branch on
which one they got. Infrastructure errors (database down, constraint
violations) are still raised as exceptions.

Taxonomy:
    OrderFailure
    ├── NotFoundError      (customer or product missing)
    │   ├── CustomerNotFound
    │   └── ProductNotFound
    └── ValidationError    (request cannot be fulfilled)
        └── InsufficientStock
"""
from dataclasses import dataclass
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict

from app.domain.order import Order


class OrderFailure(BaseModel):
    """Base class for every business failure of the order workflow"""

    code: ClassVar[str] = "order_failure"

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        return "Order could not be created"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, **self.model_dump()}


class NotFoundError(OrderFailure):
    """A referenced entity does not exist"""

    code: ClassVar[str] = "not_found"
    entity: ClassVar[str] = "entity"


class ValidationError(OrderFailure):
    """The request references existing entities but cannot be fulfilled"""

    code: ClassVar[str] = "validation_error"


class CustomerNotFound(NotFoundError):
    code: ClassVar[str] = "customer_not_found"
    entity: ClassVar[str] = "customer"

    customer_id: str

    @property
    def entity_id(self) -> str:
        return self.customer_id

    @property
    def message(self) -> str:
        return f"Customer {self.customer_id} does not exist"


class ProductNotFound(NotFoundError):
    code: ClassVar[str] = "product_not_found"
    entity: ClassVar[str] = "product"

    product_id: str

    @property
    def entity_id(self) -> str:
        return self.product_id

    @property
    def message(self) -> str:
        return f"Product {self.product_id} does not exist"


class InsufficientStock(ValidationError):
    """
    A line asks for more units than are available

    available is what the line could still take: the recorded stock in
    per-line mode, or the stock left after earlier lines for the same
    product in cumulative mode.
    """

    code: ClassVar[str] = "insufficient_stock"

    product_id: str
    product_name: str
    requested: int
    available: int

    @property
    def message(self) -> str:
        return (
            f"There are only {self.available} units of product "
            f"{self.product_name} available ({self.requested} requested)"
        )


class OrderCreationError(Exception):
    """Raised by OrderRejected.unwrap() for callers that prefer exceptions"""

    def __init__(self, failure: OrderFailure):
        super().__init__(failure.message)
        self.failure = failure


@dataclass(frozen=True)
class OrderCreated:
    order: Order

    ok: ClassVar[bool] = True

    def unwrap(self) -> Order:
        return self.order


@dataclass(frozen=True)
class OrderRejected:
    error: OrderFailure

    ok: ClassVar[bool] = False

    def unwrap(self) -> Order:
        raise OrderCreationError(self.error)


OrderResult = Union[OrderCreated, OrderRejected]
