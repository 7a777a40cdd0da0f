from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.core.container import reset_container
from modules.orders.repositories import InMemoryOrderRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO
from modules.products.repositories import InMemoryProductRepository
from modules.products.services import ProductService
from modules.users.dtos import RegisterUserDTO
from modules.users.repositories import InMemoryUserRepository
from modules.users.services import UserService
from shared.infrastructure.bus import InMemoryEventBus


@pytest.fixture(autouse=True)
def container():
    """Every test starts from empty process-wide stores."""
    return reset_container()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Service-level fixtures (isolated from the process-wide container)
# ---------------------------------------------------------------------------


@pytest.fixture()
def product_repository():
    return InMemoryProductRepository()


@pytest.fixture()
def product_service(product_repository):
    return ProductService(product_repository)


@pytest.fixture()
def user_service():
    return UserService(InMemoryUserRepository())


@pytest.fixture()
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture()
def event_bus():
    return InMemoryEventBus()


@pytest.fixture()
def order_service(order_repository, product_service, user_service, event_bus):
    return OrderService(
        order_repository=order_repository,
        product_service=product_service,
        user_service=user_service,
        event_bus=event_bus,
        tax_rate=Decimal("0.15"),
    )


@pytest.fixture()
def user(user_service):
    return user_service.register(
        RegisterUserDTO(
            email="buyer@example.com",
            password="s3cret-pass",
            first_name="Ada",
            last_name="Buyer",
        )
    )


@pytest.fixture()
def make_product(product_service):
    """Factory creating catalog products through the service."""

    def _make(name="Widget", price="10.00", stock=10, category=""):
        return product_service.create_product(
            CreateProductDTO(
                name=name,
                price=Decimal(price),
                stock_quantity=stock,
                category=category,
            )
        )

    return _make
