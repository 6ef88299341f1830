"""
Customer Domain Model

Represents the customer placing an order. Customers are owned by the
customer directory; the order workflow only reads them.

Date: 2026-10-17
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class Customer(BaseModel):
    """
    Customer domain model

    Fields:
        id: Customer identifier
        name: Customer name
        email: Customer email (optional)
        created_at: When customer was created
        updated_at: When customer was last updated
    """

    id: str = Field(..., min_length=1, description="Customer ID")
    name: str = Field(..., description="Customer name")
    email: Optional[str] = Field(None, description="Customer email")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
