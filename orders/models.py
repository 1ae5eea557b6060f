from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models

from accounts.models import phone_validator, postal_code_validator


class Order(models.Model):
    """
    A placed order.

    Totals are computed from the cart at checkout and stored as-is
    (historical correctness): later menu price changes never touch them.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        help_text="Registered customer. Null means guest checkout (or a deleted account).",
    )
    user_email = models.EmailField()

    phone = models.CharField(max_length=20, validators=[phone_validator])
    street_address = models.CharField(max_length=255)
    postal_code = models.CharField(max_length=10, validators=[postal_code_validator])
    city = models.CharField(max_length=120)
    country = models.CharField(max_length=120)

    sub_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    paid = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
            models.Index(fields=["paid", "created_at"], name="order_paid_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.user_email})"

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items.all())


class OrderItem(models.Model):
    """One cart line frozen at checkout."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    name = models.CharField(max_length=160)
    size_name = models.CharField(max_length=10, blank=True)
    extras = models.JSONField(default=list, blank=True)

    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    line_total = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.name}"

    @property
    def extras_label(self) -> str:
        return ", ".join(str(e.get("name", "")) for e in (self.extras or []) if isinstance(e, dict))
