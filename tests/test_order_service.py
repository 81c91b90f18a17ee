"""Tests for the order lifecycle: totals, tracking numbers and status."""

import re

import pytest

from config import MAX_ORDER_QUANTITY, MAX_PRICE
from enums import OrderStatus
from errors import NotFoundError, ValidationError
from models import Order, OrderProduct, User
from order_service import name_prefix

TRACKING_RE = re.compile(r"^RCD-\d{3}-[A-Z]{3}-\d{6}-\d{3}$")


class TestCreateOrder:
    """Test OrderService.create_order."""

    def test_total_is_sum_of_price_times_quantity(self, juan_order):
        assert juan_order.total_amount == 65.00

    def test_tracking_number_for_first_order(self, juan_order, today):
        assert juan_order.tracking_number == f"RCD-001-JUA-{today}-001"
        assert TRACKING_RE.match(juan_order.tracking_number)

    def test_second_order_same_day_gets_next_sequence(self, orders, juan, juan_order, thriller, today):
        second = orders.create_order(juan, [OrderProduct(product=thriller, quantity=1)])
        assert second.tracking_number == f"RCD-001-JUA-{today}-002"

    def test_new_order_is_pending(self, juan_order):
        assert juan_order.status == OrderStatus.PENDING

    def test_lines_reference_the_order(self, juan_order):
        assert len(juan_order.order_products) == 2
        for line in juan_order.order_products:
            assert line.order_id == juan_order.id

    def test_missing_user_rejected(self, orders, dark_side):
        with pytest.raises(ValidationError):
            orders.create_order(None, [OrderProduct(product=dark_side, quantity=1)])

    def test_empty_product_list_rejected(self, orders, juan):
        with pytest.raises(ValidationError):
            orders.create_order(juan, [])

    def test_zero_quantity_rejected(self, orders, juan, dark_side, db_session):
        with pytest.raises(ValidationError):
            orders.create_order(juan, [OrderProduct(product=dark_side, quantity=0)])
        assert db_session.query(Order).count() == 0

    def test_quantity_above_limit_rejected(self, orders, juan, dark_side, db_session):
        with pytest.raises(ValidationError):
            orders.create_order(juan, [OrderProduct(product=dark_side, quantity=2 ** 70)])
        assert db_session.query(Order).count() == 0

    def test_largest_price_and_quantity_total(self, albums, orders, juan):
        priciest = albums.create({"name": "Test Pressing", "price": MAX_PRICE, "artist": "Someone", "year": 2000})
        order = orders.create_order(juan, [OrderProduct(product=priciest, quantity=MAX_ORDER_QUANTITY)])
        assert order.total_amount == MAX_PRICE * MAX_ORDER_QUANTITY

    def test_deleted_order_does_not_free_its_sequence(self, orders, juan, juan_order, thriller, today):
        orders.delete_order(juan_order.id)
        again = orders.create_order(juan, [OrderProduct(product=thriller, quantity=1)])
        assert again.tracking_number.endswith("-002")


class TestCalculateTotal:
    """Test OrderService.calculate_total."""

    def test_is_idempotent(self, orders, juan_order):
        first = orders.calculate_total(juan_order)
        second = orders.calculate_total(juan_order)
        assert first == second == 65.00

    def test_rounds_half_up(self, orders, albums, juan):
        cheap = albums.create({"name": "Single", "price": 0.125, "artist": "Someone", "year": 2000})
        order = orders.create_order(juan, [OrderProduct(product=cheap, quantity=1)])
        assert order.total_amount == 0.13

    def test_flushes_pending_lines_before_summing(self, orders, juan_order, thriller):
        juan_order.order_products.append(OrderProduct(product=thriller, quantity=3))
        assert orders.calculate_total(juan_order) == 140.00


class TestAddProducts:
    """Test add_product and add_products."""

    def test_add_product_recomputes_total(self, orders, juan, dark_side, thriller):
        order = orders.create_order(juan, [OrderProduct(product=dark_side, quantity=2)])
        orders.add_product(order, thriller, 1)
        assert order.total_amount == 65.00
        assert len(order.order_products) == 2

    def test_add_product_without_product_rejected(self, orders, juan_order):
        with pytest.raises(ValidationError):
            orders.add_product(juan_order, None, 1)

    def test_add_product_negative_quantity_rejected(self, orders, juan_order, dark_side):
        with pytest.raises(ValidationError):
            orders.add_product(juan_order, dark_side, -1)

    def test_add_products_matches_repeated_add_product(self, orders, juan, dark_side, thriller):
        one_by_one = orders.create_order(juan, [OrderProduct(product=dark_side, quantity=1)])
        orders.add_product(one_by_one, thriller, 2)
        orders.add_product(one_by_one, dark_side, 1)

        batch = orders.create_order(juan, [OrderProduct(product=dark_side, quantity=1)])
        orders.add_products(batch, [(thriller, 2), (dark_side, 1)])

        assert batch.total_amount == one_by_one.total_amount == 90.00

    def test_add_products_empty_list_rejected(self, orders, juan_order):
        with pytest.raises(ValidationError):
            orders.add_products(juan_order, [])

    def test_add_products_invalid_entry_adds_nothing(self, orders, juan_order, thriller):
        with pytest.raises(ValidationError):
            orders.add_products(juan_order, [(thriller, 1), (thriller, 0)])
        assert len(juan_order.order_products) == 2
        assert juan_order.total_amount == 65.00


class TestSaveOrder:
    """Test OrderService.save_order."""

    def test_assigns_defaults_to_new_order(self, orders, juan, dark_side, today):
        order = Order(user=juan, order_products=[OrderProduct(product=dark_side, quantity=3)])
        orders.save_order(order)
        assert order.status == OrderStatus.PENDING
        assert order.tracking_number == f"RCD-001-JUA-{today}-001"
        assert order.total_amount == 60.00

    def test_saving_twice_keeps_tracking_and_total(self, orders, juan_order):
        tracking = juan_order.tracking_number
        orders.save_order(juan_order)
        orders.save_order(juan_order)
        assert juan_order.tracking_number == tracking
        assert juan_order.total_amount == 65.00

    def test_update_order_replaces_lines(self, orders, juan_order, thriller):
        orders.update_order(juan_order.id, items=[(thriller, 4)])
        assert [line.quantity for line in juan_order.order_products] == [4]
        assert juan_order.total_amount == 100.00

    def test_update_order_with_empty_lines_rejected(self, orders, juan_order):
        with pytest.raises(ValidationError):
            orders.update_order(juan_order.id, items=[])


class TestTrackingNumber:
    """Test the name prefix used in tracking numbers."""

    @pytest.mark.parametrize("name, expected", [
        ("Juan Perez", "JUA"),
        ("Ángel Ruiz", "ANG"),
        ("Al", "ALX"),
        ("J", "JXX"),
        ("Jo-Ann", "JOA"),
        ("", "XXX"),
    ])
    def test_name_prefix(self, name, expected):
        assert name_prefix(name) == expected

    def test_short_name_user_gets_valid_tracking_number(self, orders, users, dark_side):
        al = users.create_user({"name": "Al", "email": "al@example.com", "password": "secret1"})
        order = orders.create_order(al, [OrderProduct(product=dark_side, quantity=1)])
        assert TRACKING_RE.match(order.tracking_number)
        assert "-ALX-" in order.tracking_number

    def test_sequence_is_per_user(self, orders, users, juan, juan_order, dark_side):
        maria = users.create_user({"name": "Maria Lopez", "email": "maria@example.com", "password": "secret1"})
        order = orders.create_order(maria, [OrderProduct(product=dark_side, quantity=1)])
        assert order.tracking_number.startswith("RCD-002-MAR-")
        assert order.tracking_number.endswith("-001")


class TestStatusTransitions:
    """Test OrderService.change_status."""

    def test_pending_to_paid(self, orders, juan_order):
        orders.change_status(juan_order.id, OrderStatus.PAID)
        assert juan_order.status == OrderStatus.PAID

    def test_full_happy_path(self, orders, juan_order):
        for status in (OrderStatus.PAID, OrderStatus.SHIPPED, OrderStatus.COMPLETED):
            orders.change_status(juan_order.id, status)
        assert juan_order.status == OrderStatus.COMPLETED

    def test_same_status_is_noop(self, orders, juan_order):
        orders.change_status(juan_order.id, OrderStatus.PENDING)
        assert juan_order.status == OrderStatus.PENDING

    def test_backwards_transition_rejected(self, orders, juan_order):
        orders.change_status(juan_order.id, OrderStatus.PAID)
        with pytest.raises(ValidationError):
            orders.change_status(juan_order.id, OrderStatus.PENDING)

    def test_cancelled_is_terminal(self, orders, juan_order):
        orders.change_status(juan_order.id, OrderStatus.CANCELLED)
        with pytest.raises(ValidationError):
            orders.change_status(juan_order.id, OrderStatus.PAID)

    def test_pending_cannot_ship(self, orders, juan_order):
        with pytest.raises(ValidationError):
            orders.change_status(juan_order.id, OrderStatus.SHIPPED)


class TestLookups:
    """Test order lookups and deletion."""

    def test_latest_order_is_highest_id(self, orders, juan, juan_order, thriller):
        newer = orders.create_order(juan, [OrderProduct(product=thriller, quantity=1)])
        assert orders.get_latest_order(juan).id == newer.id

    def test_latest_order_without_orders(self, orders, juan):
        with pytest.raises(NotFoundError):
            orders.get_latest_order(juan)

    def test_orders_by_user(self, orders, juan, juan_order):
        assert [o.id for o in orders.get_orders_by_user(juan)] == [juan_order.id]

    def test_unknown_order(self, orders):
        with pytest.raises(NotFoundError):
            orders.get_order_by_id(999)

    def test_delete_unknown_order(self, orders):
        with pytest.raises(NotFoundError):
            orders.delete_order(999)

    def test_delete_order_keeps_user(self, orders, juan, juan_order, db_session):
        orders.delete_order(juan_order.id)
        assert orders.get_all_orders() == []
        assert db_session.get(User, juan.id) is not None
