"""User directory constants."""

from django.db import models


class Role(models.TextChoices):
    CUSTOMER = "CUSTOMER", "Customer"
    SELLER = "SELLER", "Seller"
    ADMIN = "ADMIN", "Administrator"


DEFAULT_ROLES: frozenset[str] = frozenset({Role.CUSTOMER.value})
