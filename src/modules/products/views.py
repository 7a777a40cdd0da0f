"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain and validation errors propagate to the shared exception
handler, which renders the ``{message, code}`` envelope.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.container import get_container
from modules.core.utils import json_object
from modules.products.dtos import AdjustStockDTO, CreateProductDTO, UpdateProductDTO
from modules.products.serializers import ProductSerializer


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses the process-wide ``ProductService`` from the container; all
    store access goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_container().product_service

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products  (optional ``?category=``)"""
        products = self._service.list_products(request.query_params.get("category"))
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        product = self._service.get_product(pk)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        dto = CreateProductDTO(**_product_fields(json_object(request)))
        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /products/{pk}  (full replacement)"""
        dto = UpdateProductDTO(**_product_fields(json_object(request)))
        product = self._service.update_product(pk, dto)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        self._service.delete_product(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="stock")
    def adjust_stock(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /products/{pk}/stock

        Accepts ``{"delta": N}``; negative values reserve, positive release.
        """
        dto = AdjustStockDTO(delta=json_object(request).get("delta", 0))
        product = self._service.adjust_stock(pk, dto.delta)
        return Response(ProductSerializer(product).data)


def _product_fields(data) -> dict:
    """Pick the product fields present in the request body.

    Absent optional fields are left out so the DTO defaults apply;
    ``name`` and ``price`` are always passed so their absence fails
    validation instead of raising ``TypeError``.
    """
    fields = {"name": data.get("name"), "price": data.get("price")}
    for key in ("stock_quantity", "description", "category"):
        if key in data:
            fields[key] = data[key]
    return fields
