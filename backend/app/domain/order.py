"""
Order Domain Models

Represents an order placed by a customer and the line items attached to it.
Line prices are captured at the moment the order is created and are not
affected by later changes to the catalog price.

Date: 2026-10-17
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal, InvalidOperation

from app.domain.customer import Customer
from app.domain.product import to_money


class OrderLineRequest(BaseModel):
    """
    One requested line of a new order

    Only lives for the duration of a single order request.
    """

    product_id: str = Field(..., min_length=1, description="Requested product ID")
    quantity: int = Field(..., gt=0, description="Requested units")

    model_config = ConfigDict(frozen=True)


class OrderLine(BaseModel):
    """
    Order line domain model - a product, quantity and price snapshot

    Fields:
        product_id: Reference to product catalog
        quantity: Number of units ordered
        price: Unit price at order time
    """

    product_id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    price: Decimal = Field(..., ge=0, description="Unit price at order time")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("price", mode="before")
    @classmethod
    def _quantize_price(cls, value):
        try:
            return to_money(value)
        except InvalidOperation:
            raise ValueError(f"Invalid price: {value!r}")

    @property
    def subtotal(self) -> Decimal:
        """Line total (price x quantity)"""
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['price'] = float(data['price'])
        data['subtotal'] = float(self.subtotal)
        return data


class OrderCreate(BaseModel):
    """Schema for persisting a new order with its lines"""
    customer: Customer
    lines: List[OrderLine] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Order ID generated by the store
        customer: Customer who placed the order
        lines: Order lines, in request order
        created_at: When order was created
        updated_at: When order was last updated
    """

    id: str = Field(..., description="Order ID")
    customer: Customer = Field(..., description="Customer who placed the order")
    lines: List[OrderLine] = Field(default_factory=list, description="Order lines")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    # Computed properties
    @property
    def item_count(self) -> int:
        """Number of lines in order"""
        return len(self.lines)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all lines"""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Decimal:
        """Order total"""
        return sum((line.subtotal for line in self.lines), Decimal('0.00'))

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties, ready for JSON
        """
        return {
            'id': self.id,
            'customer': self.customer.model_dump(mode='json'),
            'lines': [line.to_dict() for line in self.lines],
            'item_count': self.item_count,
            'total_quantity': self.total_quantity,
            'total': float(self.total),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
