"""
Orders API Endpoints
Handles order placement and order lookup
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.core.database import PostgresSession, get_session
from app.domain.errors import NotFoundError, OrderFailure, OrderRejected
from app.domain.order import OrderLineRequest
from app.repositories.customer_repository import CustomerRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.services.order_creation_service import OrderCreator

logger = logging.getLogger(__name__)

router = APIRouter()


# Request Models
class OrderProductRequest(BaseModel):
    """One product requested in a new order"""
    id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., gt=0, description="Units requested")


class CreateOrderRequest(BaseModel):
    """Request to place an order"""
    customer_id: str = Field(..., min_length=1, description="Customer placing the order")
    products: List[OrderProductRequest] = Field(..., min_length=1, description="Requested products")


# Dependencies
def get_order_creator(session: PostgresSession = Depends(get_session)) -> OrderCreator:
    """Wire the order creator to repositories sharing one session"""
    return OrderCreator(
        customers=CustomerRepository(session),
        products=ProductRepository(session),
        orders=OrderRepository(session),
        transactions=session,
    )


def get_order_repository(session: PostgresSession = Depends(get_session)) -> OrderRepository:
    return OrderRepository(session)


def status_code_for(failure: OrderFailure) -> int:
    """HTTP status for a rejected order"""
    if isinstance(failure, NotFoundError):
        return 404
    return 400


@router.post("/", status_code=201)
async def create_order(
    request: CreateOrderRequest,
    creator: OrderCreator = Depends(get_order_creator)
):
    """
    Place an order

    Validates stock for every product, stores the order with the current
    unit prices and takes the ordered units out of stock.
    """
    lines = [
        OrderLineRequest(product_id=product.id, quantity=product.quantity)
        for product in request.products
    ]

    try:
        result = await creator.execute(request.customer_id, lines)
    except Exception as e:
        logger.error(f"Error creating order for customer {request.customer_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating order: {str(e)}")

    if isinstance(result, OrderRejected):
        raise HTTPException(
            status_code=status_code_for(result.error),
            detail=result.error.to_dict()
        )

    return {
        "status": "success",
        "data": result.order.to_dict()
    }


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    repo: OrderRepository = Depends(get_order_repository)
):
    """
    Get a single order with its customer and lines
    """
    try:
        order = await repo.find_by_id(order_id)
    except Exception as e:
        logger.error(f"Error fetching order {order_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")

    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "data": order.to_dict()
    }
