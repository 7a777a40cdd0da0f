from typing import Any, Dict

import structlog
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.container import get_container

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    container = get_container()
    stores: Dict[str, Dict[str, Any]] = {
        "products": {"status": "up", "count": container.product_repository.count()},
        "orders": {"status": "up", "count": container.order_repository.count()},
        "users": {"status": "up", "count": container.user_repository.count()},
    }

    logger.info("health_check.completed", status="healthy")

    return JsonResponse(
        {
            "status": "healthy",
            "timestamp": timezone.now().isoformat(),
            "services": stores,
        }
    )


def not_found(request: HttpRequest, exception=None) -> JsonResponse:
    """JSON body for paths that match no route."""
    return JsonResponse({"message": "Resource not found.", "code": 404}, status=404)
