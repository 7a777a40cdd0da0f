"""Stock concurrency integration test.

Proves that stock reservation in ``OrderService.create_order`` never
oversells when many orders race for one product.

Scenario:
- Product "Gamer PC" with **stock = 5**.
- 10 threads attempt to buy 1 unit each simultaneously.
- Exactly 5 succeed, 5 raise ``InsufficientStock``.
- Final stock is 0 (never negative).
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

import pytest

from modules.core.container import get_container
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.products.dtos import CreateProductDTO
from modules.products.exceptions import InsufficientStock
from modules.users.dtos import RegisterUserDTO

pytestmark = pytest.mark.integration

logger = logging.getLogger(__name__)

INITIAL_STOCK = 5
NUM_WORKERS = 10


@pytest.fixture()
def services():
    return get_container()


@pytest.fixture()
def gamer_pc(services):
    return services.product_service.create_product(
        CreateProductDTO(
            name="Gamer PC", price=Decimal("2999.99"), stock_quantity=INITIAL_STOCK
        )
    )


@pytest.fixture()
def buyer(services):
    return services.user_service.register(
        RegisterUserDTO(email="concurrency@example.com", password="pw")
    )


class TestStockConcurrency:
    def test_never_oversells(self, services, gamer_pc, buyer):
        barrier = threading.Barrier(NUM_WORKERS)

        def place(thread_id: int) -> str:
            dto = CreateOrderDTO(
                user_id=buyer.id,
                shipping_address=f"Desk {thread_id}",
                items=[CreateOrderItemDTO(product_id=gamer_pc.id, quantity=1)],
            )
            barrier.wait(timeout=5)
            try:
                services.order_service.create_order(dto)
                return "success"
            except InsufficientStock:
                logger.info("Thread %d: InsufficientStock (expected)", thread_id)
                return "insufficient"

        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [pool.submit(place, i) for i in range(NUM_WORKERS)]
            results = [f.result() for f in as_completed(futures)]

        assert results.count("success") == INITIAL_STOCK
        assert results.count("insufficient") == NUM_WORKERS - INITIAL_STOCK
        product = services.product_service.get_product(gamer_pc.id)
        assert product.stock_quantity == 0
        assert len(services.order_service.list_orders()) == INITIAL_STOCK

    def test_mixed_create_and_cancel_conserves_units(self, services, gamer_pc, buyer):
        orders = [
            services.order_service.create_order(
                CreateOrderDTO(
                    user_id=buyer.id,
                    shipping_address="Addr",
                    items=[CreateOrderItemDTO(product_id=gamer_pc.id, quantity=1)],
                )
            )
            for _ in range(3)
        ]

        def cancel(order_id):
            services.order_service.cancel_order(order_id)

        def place(_):
            try:
                services.order_service.create_order(
                    CreateOrderDTO(
                        user_id=buyer.id,
                        shipping_address="Addr",
                        items=[CreateOrderItemDTO(product_id=gamer_pc.id, quantity=1)],
                    )
                )
            except InsufficientStock:
                pass

        with ThreadPoolExecutor(max_workers=6) as pool:
            jobs = [pool.submit(cancel, o.id) for o in orders]
            jobs += [pool.submit(place, i) for i in range(6)]
            for job in jobs:
                job.result()

        active = [
            o for o in services.order_service.list_orders() if o.status == "PENDING"
        ]
        reserved = sum(o.item_count for o in active)
        stock = services.product_service.get_product(gamer_pc.id).stock_quantity
        assert stock >= 0
        assert stock + reserved == INITIAL_STOCK
