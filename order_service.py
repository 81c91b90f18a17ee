"""
Order lifecycle: creation, product lines, totals, tracking numbers and
status changes.

``calculate_total`` is the only place that writes ``Order.total_amount``
and every change to an order's product lines ends with a call to it.
"""
import unicodedata
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from config import MAX_ORDER_QUANTITY
from database import transactional
from enums import ORDER_TRANSITIONS, OrderStatus
from errors import NotFoundError, ValidationError
from logging_config import get_logger
from models import Order, OrderProduct, Product, User
from repositories import OrderRepository, UserRepository

logger = get_logger("orders")

CENT = Decimal("0.01")

OrderLine = Tuple[Product, int]


def name_prefix(name: Optional[str]) -> str:
    """First three ASCII letters of ``name``, uppercased, padded with X.

    >>> name_prefix("Ángel Ruiz")
    'ANG'
    >>> name_prefix("Al")
    'ALX'
    """
    folded = unicodedata.normalize("NFKD", name or "")
    letters = [c for c in folded if c.isascii() and c.isalpha()]
    return "".join(letters[:3]).upper().ljust(3, "X")


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.users = UserRepository(db)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_order_by_id(self, order_id: int) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order with id {order_id} not found.")
        return order

    def get_all_orders(self) -> List[Order]:
        return self.orders.find_all()

    def get_orders_by_user(self, user: User) -> List[Order]:
        return self.orders.find_by_user(user)

    def get_latest_order(self, user: User) -> Order:
        order = self.orders.find_latest_by_user(user)
        if order is None:
            raise NotFoundError(f"User {user.id} has no orders.")
        return order

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @transactional
    def create_order(self, user: Optional[User], order_products: Sequence[OrderProduct]) -> Order:
        if user is None:
            raise ValidationError("An order needs a user.")
        if not order_products:
            raise ValidationError("An order needs at least one product.")
        for line in order_products:
            self._check_line(line.product, line.quantity)

        order = Order(
            user=user,
            status=OrderStatus.PENDING,
            tracking_number=self.generate_tracking_number(user),
            total_amount=0.0,
        )
        self.orders.save(order)
        for line in order_products:
            order.order_products.append(line)
        self.calculate_total(order)
        logger.info(
            "Order %s created for user %s: %d line(s), total %.2f",
            order.tracking_number, user.id, len(order.order_products), order.total_amount,
        )
        return order

    @transactional
    def add_product(self, order: Order, product: Optional[Product], quantity: int = 1) -> Order:
        self._check_line(product, quantity)
        order.order_products.append(OrderProduct(product=product, quantity=quantity))
        self.calculate_total(order)
        logger.info("Added %d x product %s to order %s", quantity, product.id, order.id)
        return order

    @transactional
    def add_products(self, order: Order, items: Sequence[OrderLine]) -> Order:
        """Append several lines and recompute the total once."""
        if not items:
            raise ValidationError("No products to add.")
        for product, quantity in items:
            self._check_line(product, quantity)
        for product, quantity in items:
            order.order_products.append(OrderProduct(product=product, quantity=quantity))
        self.calculate_total(order)
        logger.info("Added %d line(s) to order %s", len(items), order.id)
        return order

    @transactional
    def save_order(self, order: Order) -> Order:
        return self._save(order)

    @transactional
    def update_order(
        self,
        order_id: int,
        status: Optional[OrderStatus] = None,
        items: Optional[Sequence[OrderLine]] = None,
    ) -> Order:
        """Change the status and/or replace the product lines of an order."""
        order = self.get_order_by_id(order_id)
        if status is not None:
            self._transition(order, status)
        if items is not None:
            if not items:
                raise ValidationError("An order needs at least one product.")
            for product, quantity in items:
                self._check_line(product, quantity)
            order.order_products = [
                OrderProduct(product=product, quantity=quantity) for product, quantity in items
            ]
        self._save(order)
        logger.info("Order %s updated", order.id)
        return order

    @transactional
    def change_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.get_order_by_id(order_id)
        previous = order.status or OrderStatus.PENDING
        self._transition(order, status)
        self.orders.save(order)
        logger.info("Order %s status %s -> %s", order.id, previous.value, status.value)
        return order

    @transactional
    def delete_order(self, order_id: int) -> None:
        order = self.get_order_by_id(order_id)
        self.orders.delete(order)
        logger.info("Order %s deleted", order_id)

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    def calculate_total(self, order: Order) -> float:
        """Recompute ``total_amount`` from the lines stored for ``order``.

        Pending changes are flushed first, then the lines are reloaded
        from the database so the in-memory list is never trusted.
        """
        self.db.flush()
        self.db.expire(order, ["order_products"])
        total = sum(
            (Decimal(str(line.product.price)) * line.quantity for line in order.order_products),
            Decimal("0"),
        )
        order.total_amount = float(total.quantize(CENT, rounding=ROUND_HALF_UP))
        return order.total_amount

    def generate_tracking_number(self, user: User) -> str:
        """``RCD-<user id>-<name prefix>-<ddmmyy>-<per-user sequence>``.

        The sequence is the user's order counter, incremented in the
        current transaction; numbers are never handed out twice.
        """
        sequence = self.orders.next_sequence(user)
        return "RCD-{:03d}-{}-{}-{:03d}".format(
            user.id, name_prefix(user.name), date.today().strftime("%d%m%y"), sequence
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _save(self, order: Order) -> Order:
        user = order.user
        if user is None and order.user_id is not None:
            user = self.users.find_by_id(order.user_id)
        if user is None:
            raise ValidationError("An order needs a user.")
        order.user = user
        if order.status is None:
            order.status = OrderStatus.PENDING
        self.orders.save(order)
        if not order.tracking_number:
            order.tracking_number = self.generate_tracking_number(user)
        self.calculate_total(order)
        return order

    @staticmethod
    def _check_line(product: Optional[Product], quantity: Optional[int]) -> None:
        if product is None:
            raise ValidationError("Product must not be empty.")
        if quantity is None or quantity <= 0:
            raise ValidationError("Quantity must be at least 1.")
        if quantity > MAX_ORDER_QUANTITY:
            raise ValidationError(f"Quantity must be at most {MAX_ORDER_QUANTITY}.")

    @staticmethod
    def _transition(order: Order, status: OrderStatus) -> None:
        current = order.status or OrderStatus.PENDING
        if status == current:
            return
        if status not in ORDER_TRANSITIONS[current]:
            raise ValidationError(
                f"Cannot change order status from {current.value} to {status.value}."
            )
        order.status = status
