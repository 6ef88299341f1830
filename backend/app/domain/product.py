"""
Product Domain Model

Represents a sellable product in the catalog: its current unit price and
the number of units available for sale.

Date: 2026-10-17
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Quantize a price to two decimal places (numeric(10,2) in the database)"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Product identifier
        name: Product name
        price: Current unit price
        quantity: Units currently available for sale
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: str = Field(..., min_length=1, description="Product ID")
    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., description="Unit price", ge=0)
    quantity: int = Field(..., description="Available stock", ge=0)
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("price", mode="before")
    @classmethod
    def _quantize_price(cls, value):
        try:
            return to_money(value)
        except InvalidOperation:
            raise ValueError(f"Invalid price: {value!r}")


class StockUpdate(BaseModel):
    """New absolute stock figure for one product"""
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0, description="New available quantity")

    model_config = ConfigDict(frozen=True)
