"""Order service layer (Use Cases).

Orchestrates the core business logic for order creation,
status management, and cancellation.  There is no storage-level
transaction across the catalog and the order store, so the service
applies its own all-or-nothing rules:

- Every line is validated (product exists, enough stock) and the
  order total checked against ``MAX_ORDER_TOTAL`` before any
  stock moves.
- If a stock deduction fails part-way, the deductions already made by
  the same call are handed back before the error propagates.
- Cancellation (from PENDING or PROCESSED) restores every line; if a
  restore fails the others are undone and the status stays as it was.
- Status transitions run under the per-order lock of the repository,
  so a concurrent double cancellation releases stock once.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional

import structlog

from modules.orders.constants import (
    DEFAULT_TAX_RATE,
    MAX_ORDER_TOTAL,
    STOCK_RELEASING_STATES,
    OrderStatus,
)
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import InvalidTransition, OrderNotFound
from modules.orders.models import Order, OrderLine
from modules.products.exceptions import InsufficientStock
from shared.domain.exceptions import DomainError, InvalidData

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.services import ProductService
    from modules.users.services import UserService
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its store and collaborators via constructor injection (DIP).
    ``user_service`` is optional; when given, orders may only be placed
    for registered users.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_service: ProductService,
        user_service: Optional[UserService] = None,
        event_bus: Optional[IEventBus] = None,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
    ) -> None:
        self._order_repo = order_repository
        self._products = product_service
        self._users = user_service
        self._event_bus = event_bus
        self._tax_rate = Decimal(tax_rate)

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a new PENDING order, reserving stock for every line.

        Steps:
        1. Resolve the user (when a user directory is wired in).
        2. For each item: fetch the product, check stock, snapshot
           name and unit price.  Nothing is deducted yet.
        3. Price the order and reject totals above ``MAX_ORDER_TOTAL``.
        4. Deduct stock line by line; on failure hand back what this
           call already deducted.
        5. Persist the order; on failure hand back all stock.

        Raises:
            UserNotFound: the user does not exist.
            ProductNotFound: a product does not exist.
            InsufficientStock: not enough stock for a line.
            InvalidData: the order total exceeds ``MAX_ORDER_TOTAL``.
        """
        log = logger.bind(user_id=dto.user_id, line_count=len(dto.items))
        log.info("order.creation_started")

        if self._users is not None:
            self._users.get_user(dto.user_id)

        lines = self._build_lines(dto.items, log)
        order = Order.place(
            user_id=dto.user_id,
            shipping_address=dto.shipping_address,
            lines=lines,
            tax_rate=self._tax_rate,
        )
        if order.total > MAX_ORDER_TOTAL:
            log.warning("order.total_exceeded", total=str(order.total))
            raise InvalidData(
                f"Order total {order.total} exceeds the maximum of {MAX_ORDER_TOTAL}."
            )

        self._reserve_stock(lines, log)
        try:
            order = self._order_repo.save(order)
        except Exception:
            log.exception("order.persist_failed")
            self._release_stock(lines, log)
            raise

        log.info(
            "order.created",
            order_id=order.id,
            total=str(order.total),
            total_with_tax=str(order.total_with_tax),
        )
        self._publish(
            OrderCreated(
                aggregate_id=order.id,
                user_id=order.user_id,
                total_with_tax=order.total_with_tax,
            )
        )
        return order

    def update_status(
        self,
        order_id: str,
        new_status: str,
        notes: str = "",
    ) -> Order:
        """Transition an order to a new status.

        The order stays locked from the transition check until the new
        value is stored.  Entering CANCELLED restores the stock of every
        line before the status is committed.

        Raises:
            InvalidData: ``new_status`` is not a known status.
            OrderNotFound: order does not exist.
            InvalidTransition: transition is not allowed.
            ProductNotFound: stock could not be restored for a line.
        """
        new_status = _parse_status(new_status)
        log = logger.bind(order_id=str(order_id), new_status=str(new_status))

        with self._order_repo.locked(str(order_id)) as order:
            if order is None:
                raise OrderNotFound(f"Order {order_id} not found.")

            log = log.bind(current_status=str(order.status))
            if not order.can_transition_to(new_status):
                log.warning("order.invalid_transition")
                raise InvalidTransition(str(order.status), str(new_status))

            releases_stock = (
                new_status == OrderStatus.CANCELLED
                and order.status in STOCK_RELEASING_STATES
            )
            if releases_stock:
                self._restore_stock(order, log)

            old_status = order.status
            updated = self._order_repo.save(order.with_status(new_status, notes))

        log.info("order.status_updated")
        self._publish(
            OrderStatusChanged(
                aggregate_id=updated.id,
                old_status=str(old_status),
                new_status=str(new_status),
            )
        )
        if new_status == OrderStatus.CANCELLED:
            self._publish(
                OrderCancelled(
                    aggregate_id=updated.id,
                    released_units=updated.item_count if releases_stock else 0,
                )
            )
        return updated

    def cancel_order(self, order_id: str, notes: str = "") -> Order:
        """Cancel an order and release its reserved stock.

        Shortcut for ``update_status(order_id, CANCELLED, notes)``.
        """
        return self.update_status(
            order_id, OrderStatus.CANCELLED, notes or "Order cancelled"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders_by_user(self, user_id: str) -> List[Order]:
        """Orders placed by one user, newest first; empty if none."""
        return self._order_repo.list_by_user(str(user_id))

    def list_orders(self) -> List[Order]:
        """Every order, newest first."""
        return self._order_repo.list()

    # ------------------------------------------------------------------
    # Stock reservation helpers
    # ------------------------------------------------------------------

    def _build_lines(
        self, items: Iterable[CreateOrderItemDTO], log
    ) -> List[OrderLine]:
        lines = []
        for item in items:
            product = self._products.get_product(item.product_id)
            if product.stock_quantity < item.quantity:
                log.warning(
                    "order.insufficient_stock",
                    product_id=product.id,
                    available=product.stock_quantity,
                    requested=item.quantity,
                )
                raise InsufficientStock(
                    product_name=product.name,
                    available=product.stock_quantity,
                    requested=item.quantity,
                )
            lines.append(
                OrderLine(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=item.quantity,
                    unit_price=product.price,
                )
            )
        return lines

    def _reserve_stock(self, lines: List[OrderLine], log) -> None:
        reserved: List[OrderLine] = []
        for line in lines:
            try:
                product = self._products.adjust_stock(line.product_id, -line.quantity)
            except DomainError:
                log.warning(
                    "order.reservation_failed",
                    product_id=line.product_id,
                    rolled_back_lines=len(reserved),
                )
                self._release_stock(reserved, log)
                raise
            reserved.append(line)
            log.info(
                "order.stock_reserved",
                product_id=line.product_id,
                quantity=line.quantity,
                remaining=product.stock_quantity,
            )

    def _release_stock(self, lines: List[OrderLine], log) -> None:
        """Hand back stock reserved by a creation call that is failing.

        Keeps going when one line cannot be released so the others are
        not left reserved; the caller re-raises the original error.
        """
        for line in lines:
            try:
                self._products.adjust_stock(line.product_id, line.quantity)
            except DomainError as exc:
                log.error(
                    "order.stock_release_failed",
                    product_id=line.product_id,
                    quantity=line.quantity,
                    error=str(exc),
                )

    def _restore_stock(self, order: Order, log) -> None:
        restored: List[OrderLine] = []
        for line in order.lines:
            try:
                product = self._products.adjust_stock(line.product_id, line.quantity)
            except DomainError:
                log.error(
                    "order.stock_restore_failed",
                    product_id=line.product_id,
                    undone_lines=len(restored),
                )
                for done in restored:
                    try:
                        self._products.adjust_stock(done.product_id, -done.quantity)
                    except DomainError as exc:
                        log.error(
                            "order.stock_restore_undo_failed",
                            product_id=done.product_id,
                            quantity=done.quantity,
                            error=str(exc),
                        )
                raise
            restored.append(line)
            log.info(
                "order.stock_released",
                product_id=line.product_id,
                quantity=line.quantity,
                restored_stock=product.stock_quantity,
            )

    def _publish(self, event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)


def _parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError as exc:
        raise InvalidData(f"Unknown order status: {value}.") from exc
