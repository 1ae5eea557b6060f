from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Category(models.Model):
    """Menu section (e.g. "Pizza", "Drinks"). Sorted by `order`, then name."""

    name = models.CharField(max_length=120)
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "name"]
        verbose_name_plural = "Categories"
        indexes = [
            models.Index(fields=["order"], name="category_order_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    """A menu item. Price at checkout is base_price + chosen size + chosen extras."""

    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="products")

    name = models.CharField(max_length=160)
    description = models.TextField()
    image = models.ImageField(upload_to="products/")
    base_price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "name"]
        indexes = [
            models.Index(fields=["category", "order"], name="product_category_order_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def image_url(self) -> str:
        try:
            return self.image.url if self.image else ""
        except ValueError:
            return ""


class Size(models.Model):
    class Name(models.TextChoices):
        SMALL = "SMALL", "Small"
        MEDIUM = "MEDIUM", "Medium"
        LARGE = "LARGE", "Large"

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="sizes")
    name = models.CharField(max_length=10, choices=Name.choices)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        ordering = ["price", "id"]
        constraints = [
            models.UniqueConstraint(fields=["product", "name"], name="uniq_size_per_product"),
        ]

    def __str__(self) -> str:
        return f"{self.product_id}:{self.name}"


class Extra(models.Model):
    class Name(models.TextChoices):
        CHEESE = "CHEESE", "Cheese"
        ONION = "ONION", "Onion"
        PEPPER = "PEPPER", "Pepper"
        TOMATO = "TOMATO", "Tomato"
        BACON = "BACON", "Bacon"

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="extras")
    name = models.CharField(max_length=10, choices=Name.choices)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["product", "name"], name="uniq_extra_per_product"),
        ]

    def __str__(self) -> str:
        return f"{self.product_id}:{self.name}"
