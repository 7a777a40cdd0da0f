"""Unit tests for OrderService.

Covers:
- Order creation with stock reservation and totals.
- User and product validation.
- All-or-nothing reservation: a failing line moves no stock.
- Rollback of partial reservations when a deduction fails late.
- Queries (get, list, list by user).
- Domain events published on the bus.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.orders.constants import MAX_ITEM_QUANTITY, OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import InvalidTransition, OrderNotFound
from modules.orders.repositories import InMemoryOrderRepository
from modules.orders.services import OrderService
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.users.dtos import RegisterUserDTO
from modules.users.exceptions import UserNotFound
from shared.domain.exceptions import InvalidData

pytestmark = pytest.mark.unit


def _dto(user_id, *items, address="221B Baker Street"):
    return CreateOrderDTO(
        user_id=user_id,
        shipping_address=address,
        items=[
            CreateOrderItemDTO(product_id=product_id, quantity=quantity)
            for product_id, quantity in items
        ],
    )


# ===========================================================================
# create_order
# ===========================================================================


class TestCreateOrder:
    def test_success(self, order_service, product_service, make_product, user):
        product_a = make_product(name="A", price="10.00", stock=100)
        product_b = make_product(name="B", price="25.50", stock=50)

        order = order_service.create_order(
            _dto(user.id, (product_a.id, 2), (product_b.id, 1))
        )

        assert order.status == OrderStatus.PENDING
        assert order.user_id == user.id
        assert order.shipping_address == "221B Baker Street"
        assert order.total == Decimal("45.50")
        assert order.total_with_tax == Decimal("45.50") * Decimal("1.15")
        assert product_service.get_product(product_a.id).stock_quantity == 98
        assert product_service.get_product(product_b.id).stock_quantity == 49

    def test_lines_snapshot_catalog(self, order_service, make_product, user):
        product = make_product(name="Lamp", price="12.30", stock=5)

        order = order_service.create_order(_dto(user.id, (product.id, 3)))

        (line,) = order.lines
        assert line.product_id == product.id
        assert line.product_name == "Lamp"
        assert line.unit_price == Decimal("12.30")
        assert line.quantity == 3
        assert line.subtotal == Decimal("36.90")

    def test_initial_history_entry(self, order_service, make_product, user):
        product = make_product()

        order = order_service.create_order(_dto(user.id, (product.id, 1)))

        assert len(order.history) == 1
        assert order.history[0].old_status is None
        assert order.history[0].new_status == OrderStatus.PENDING

    def test_other_products_untouched(
        self, order_service, product_service, make_product, user
    ):
        ordered = make_product(stock=10)
        bystander = make_product(stock=7)

        order_service.create_order(_dto(user.id, (ordered.id, 4)))

        assert product_service.get_product(bystander.id).stock_quantity == 7

    def test_order_is_stored(self, order_service, make_product, user):
        product = make_product()

        order = order_service.create_order(_dto(user.id, (product.id, 1)))

        assert order_service.get_order(order.id) == order

    def test_unknown_user(self, order_service, make_product):
        product = make_product(stock=5)

        with pytest.raises(UserNotFound):
            order_service.create_order(_dto("missing-user", (product.id, 1)))

    def test_unknown_product(self, order_service, product_service, make_product, user):
        product = make_product(stock=5)

        with pytest.raises(ProductNotFound):
            order_service.create_order(
                _dto(user.id, (product.id, 1), ("missing-product", 1))
            )

        assert product_service.get_product(product.id).stock_quantity == 5

    def test_insufficient_stock_moves_nothing(
        self, order_service, product_service, make_product, user
    ):
        plenty = make_product(name="Plenty", stock=100)
        scarce = make_product(name="Scarce", stock=2)

        with pytest.raises(InsufficientStock) as exc_info:
            order_service.create_order(_dto(user.id, (plenty.id, 5), (scarce.id, 3)))

        assert exc_info.value.product_name == "Scarce"
        assert exc_info.value.available == 2
        assert exc_info.value.requested == 3
        assert product_service.get_product(plenty.id).stock_quantity == 100
        assert product_service.get_product(scarce.id).stock_quantity == 2
        assert order_service.list_orders() == []

    def test_exact_stock_succeeds(
        self, order_service, product_service, make_product, user
    ):
        product = make_product(stock=3)

        order_service.create_order(_dto(user.id, (product.id, 3)))

        assert product_service.get_product(product.id).stock_quantity == 0

    def test_without_user_directory(self, order_repository, product_service, make_product):
        service = OrderService(order_repository, product_service)
        product = make_product()

        order = service.create_order(_dto("any-user", (product.id, 1)))

        assert order.user_id == "any-user"

    def test_configured_tax_rate(self, order_repository, product_service, make_product):
        service = OrderService(
            order_repository, product_service, tax_rate=Decimal("0.20")
        )
        product = make_product(price="10.00")

        order = service.create_order(_dto("u", (product.id, 1)))

        assert order.total_with_tax == Decimal("12.00")

    def test_largest_single_line(self, order_service, make_product, user):
        product = make_product(price="99999999.99", stock=MAX_ITEM_QUANTITY)

        order = order_service.create_order(
            _dto(user.id, (product.id, MAX_ITEM_QUANTITY))
        )

        assert order.total == Decimal("99999999990000.00")
        assert order.total_with_tax == Decimal("114999999988500.0000")

    def test_total_above_maximum_moves_nothing(
        self,
        order_service,
        product_service,
        order_repository,
        event_bus,
        make_product,
        user,
    ):
        first = make_product(name="A", price="99999999.99", stock=MAX_ITEM_QUANTITY)
        second = make_product(name="B", price="99999999.99", stock=MAX_ITEM_QUANTITY)
        received = []
        event_bus.subscribe(OrderCreated, received.append)

        with pytest.raises(InvalidData, match="exceeds the maximum"):
            order_service.create_order(
                _dto(
                    user.id,
                    (first.id, MAX_ITEM_QUANTITY),
                    (second.id, MAX_ITEM_QUANTITY),
                )
            )

        for product in (first, second):
            stock = product_service.get_product(product.id).stock_quantity
            assert stock == MAX_ITEM_QUANTITY
        assert order_repository.list() == []
        assert received == []


class TestCreateOrderRollback:
    """Deductions already made are handed back when a later one fails."""

    def test_late_deduction_failure_restores_earlier_lines(
        self, order_repository, product_service, make_product
    ):
        first = make_product(name="First", stock=10)
        second = make_product(name="Second", stock=10)

        products = MagicMock(wraps=product_service)

        def adjust(product_id, delta):
            if product_id == second.id and delta < 0:
                raise InsufficientStock("Second", 0, -delta)
            return product_service.adjust_stock(product_id, delta)

        products.adjust_stock.side_effect = adjust
        service = OrderService(order_repository, products)

        with pytest.raises(InsufficientStock):
            service.create_order(_dto("u", (first.id, 4), (second.id, 2)))

        assert product_service.get_product(first.id).stock_quantity == 10
        assert product_service.get_product(second.id).stock_quantity == 10
        assert order_repository.count() == 0

    def test_persist_failure_restores_stock(self, product_service, make_product):
        product = make_product(stock=10)
        failing_repo = MagicMock()
        failing_repo.save.side_effect = RuntimeError("store unavailable")
        service = OrderService(failing_repo, product_service)

        with pytest.raises(RuntimeError, match="store unavailable"):
            service.create_order(_dto("u", (product.id, 4)))

        assert product_service.get_product(product.id).stock_quantity == 10


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_order_not_found(self, order_service):
        with pytest.raises(OrderNotFound):
            order_service.get_order("missing")

    def test_list_orders_by_user(self, order_service, user_service, make_product, user):
        other = user_service.register(
            RegisterUserDTO(email="other@example.com", password="pw")
        )
        product = make_product(stock=10)
        mine = order_service.create_order(_dto(user.id, (product.id, 1)))
        order_service.create_order(_dto(other.id, (product.id, 1)))

        assert order_service.list_orders_by_user(user.id) == [mine]

    def test_list_orders_by_unknown_user_is_empty(self, order_service):
        assert order_service.list_orders_by_user("nobody") == []

    def test_list_orders_newest_first(self, order_service, make_product, user):
        product = make_product(stock=10)
        first = order_service.create_order(_dto(user.id, (product.id, 1)))
        second = order_service.create_order(_dto(user.id, (product.id, 1)))

        ids = [order.id for order in order_service.list_orders()]

        assert ids == [second.id, first.id]


# ===========================================================================
# Events
# ===========================================================================


class TestEvents:
    def test_created_event(self, order_service, event_bus, make_product, user):
        handler = MagicMock()
        event_bus.subscribe(OrderCreated, handler)
        product = make_product()

        order = order_service.create_order(_dto(user.id, (product.id, 1)))

        handler.handle.assert_called_once()
        event = handler.handle.call_args.args[0]
        assert event.aggregate_id == order.id
        assert event.user_id == user.id
        assert event.total_with_tax == order.total_with_tax

    def test_cancel_events(self, order_service, event_bus, make_product, user):
        changed, cancelled = MagicMock(), MagicMock()
        event_bus.subscribe(OrderStatusChanged, changed)
        event_bus.subscribe(OrderCancelled, cancelled)
        product = make_product(stock=10)
        order = order_service.create_order(_dto(user.id, (product.id, 3)))

        order_service.cancel_order(order.id)

        status_event = changed.handle.call_args.args[0]
        assert status_event.old_status == OrderStatus.PENDING
        assert status_event.new_status == OrderStatus.CANCELLED
        assert cancelled.handle.call_args.args[0].released_units == 3

    def test_no_event_on_rejected_transition(
        self, order_service, event_bus, make_product, user
    ):
        changed = MagicMock()
        event_bus.subscribe(OrderStatusChanged, changed)
        product = make_product()
        order = order_service.create_order(_dto(user.id, (product.id, 1)))

        with pytest.raises(InvalidTransition):
            order_service.update_status(order.id, OrderStatus.DELIVERED)

        changed.handle.assert_not_called()


class TestIsolatedStores:
    def test_services_do_not_share_state(self, product_service, make_product):
        product = make_product()
        one = OrderService(InMemoryOrderRepository(), product_service)
        two = OrderService(InMemoryOrderRepository(), product_service)

        one.create_order(_dto("u", (product.id, 1)))

        assert two.list_orders() == []
