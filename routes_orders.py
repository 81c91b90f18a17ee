from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database import get_db
from mappers import order_to_out
from models import OrderProduct
from order_service import OrderService
from product_service import ProductService
from schemas import OrderCreate, OrderItemIn, OrderOut, OrderUpdate, StatusUpdate
from user_service import UserService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def resolve_items(items: List[OrderItemIn], products: ProductService):
    """(product, quantity) pairs for the requested lines; unknown ids raise 404."""
    return [(products.get_by_id(item.product_id), item.quantity) for item in items]


@router.get("", response_model=List[OrderOut])
def list_orders(orders: OrderService = Depends(get_order_service)):
    return [order_to_out(o) for o in orders.get_all_orders()]


@router.get("/user/{user_id}", response_model=List[OrderOut])
def list_orders_by_user(
    user_id: int,
    orders: OrderService = Depends(get_order_service),
    users: UserService = Depends(get_user_service),
):
    return [order_to_out(o) for o in orders.get_orders_by_user(users.get_by_id(user_id))]


@router.get("/latest/{user_id}", response_model=OrderOut)
def latest_order(
    user_id: int,
    orders: OrderService = Depends(get_order_service),
    users: UserService = Depends(get_user_service),
):
    return order_to_out(orders.get_latest_order(users.get_by_id(user_id)))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, orders: OrderService = Depends(get_order_service)):
    return order_to_out(orders.get_order_by_id(order_id))


@router.post("/new", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    orders: OrderService = Depends(get_order_service),
    products: ProductService = Depends(get_product_service),
    users: UserService = Depends(get_user_service),
):
    user = users.get_by_id(payload.user_id)
    lines = [
        OrderProduct(product=product, quantity=quantity)
        for product, quantity in resolve_items(payload.items, products)
    ]
    return order_to_out(orders.create_order(user, lines))


@router.post("/{order_id}/products", response_model=OrderOut)
def add_products(
    order_id: int,
    items: List[OrderItemIn],
    orders: OrderService = Depends(get_order_service),
    products: ProductService = Depends(get_product_service),
):
    order = orders.get_order_by_id(order_id)
    return order_to_out(orders.add_products(order, resolve_items(items, products)))


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    orders: OrderService = Depends(get_order_service),
    products: ProductService = Depends(get_product_service),
):
    items = resolve_items(payload.items, products) if payload.items is not None else None
    return order_to_out(orders.update_order(order_id, status=payload.status, items=items))


@router.patch("/{order_id}/status", response_model=OrderOut)
def change_status(order_id: int, payload: StatusUpdate, orders: OrderService = Depends(get_order_service)):
    return order_to_out(orders.change_status(order_id, payload.status))


@router.delete("/{order_id}", status_code=204, response_class=Response)
def delete_order(order_id: int, orders: OrderService = Depends(get_order_service)):
    orders.delete_order(order_id)
    return Response(status_code=204)
