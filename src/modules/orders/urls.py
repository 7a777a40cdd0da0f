"""Order URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.orders.views import OrderViewSet

urlpatterns = [
    path(
        "orders",
        OrderViewSet.as_view({"get": "list", "post": "create"}),
        name="order-list",
    ),
    path(
        "orders/<str:order_id>/details",
        OrderViewSet.as_view({"get": "retrieve"}),
        name="order-detail",
    ),
    path(
        "orders/<str:order_id>/status",
        OrderViewSet.as_view({"put": "update_status"}),
        name="order-status",
    ),
    path(
        "orders/<str:user_id>",
        OrderViewSet.as_view({"get": "list_by_user"}),
        name="order-by-user",
    ),
]
