"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions propagate to the shared exception handler, which
translates them into status codes; the view never swallows errors.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.container import get_container
from modules.core.utils import json_object
from modules.orders.dtos import (
    CreateOrderDTO,
    CreateOrderItemDTO,
    UpdateOrderStatusDTO,
)
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses the process-wide ``OrderService`` from the container (DIP).
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().order_service

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /orders

        When ``user_id`` is omitted the order is placed for the caller
        identified by the bearer token.
        """
        create_serializer = CreateOrderSerializer(data=json_object(request))
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        user_id = data.get("user_id") or ""
        if not user_id and request.user is not None:
            user_id = request.user.id

        dto = CreateOrderDTO(
            user_id=user_id,
            shipping_address=data["shipping_address"],
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
        )
        order = self._service.create_order(dto)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /orders"""
        orders = self._service.list_orders()
        return Response(OrderSerializer(orders, many=True).data)

    def list_by_user(self, request: Request, user_id: str) -> Response:
        """GET /orders/{user_id}

        An unknown user simply has no orders.
        """
        orders = self._service.list_orders_by_user(user_id)
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, order_id: str) -> Response:
        """GET /orders/{order_id}/details"""
        order = self._service.get_order(order_id)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def update_status(self, request: Request, order_id: str) -> Response:
        """PUT /orders/{order_id}/status

        Moving to CANCELLED releases the reserved stock.
        """
        status_serializer = UpdateOrderStatusSerializer(data=json_object(request))
        status_serializer.is_valid(raise_exception=True)

        dto = UpdateOrderStatusDTO(**status_serializer.validated_data)
        order = self._service.update_status(
            order_id=order_id,
            new_status=dto.status,
            notes=dto.notes,
        )
        return Response(OrderSerializer(order).data)
