from __future__ import annotations

from decimal import Decimal
from io import BytesIO

from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand
from django.db import transaction
from PIL import Image

from catalog.models import Category, Extra, Product, Size
from catalog.services import invalidate_menu_cache


# (category, [(name, description, base_price), ...])
MENU = [
    (
        "Pizza",
        [
            ("Margherita", "Tomato sauce, mozzarella and fresh basil.", "8.00"),
            ("Pepperoni", "Tomato sauce, mozzarella and pepperoni.", "10.00"),
            ("Vegetarian", "Peppers, onions, olives and mushrooms.", "9.50"),
        ],
    ),
    (
        "Sides",
        [
            ("Garlic Bread", "Toasted bread with garlic butter.", "4.00"),
        ],
    ),
    (
        "Drinks",
        [
            ("Lemonade", "Freshly squeezed.", "3.00"),
        ],
    ),
]

# Only the pizza category gets sizes and extras.
SIZED_CATEGORIES = {"Pizza"}

SIZE_PRICES = [
    (Size.Name.SMALL, Decimal("0.00")),
    (Size.Name.MEDIUM, Decimal("2.00")),
    (Size.Name.LARGE, Decimal("4.00")),
]

EXTRA_PRICES = [
    (Extra.Name.CHEESE, Decimal("2.00")),
    (Extra.Name.TOMATO, Decimal("4.00")),
    (Extra.Name.ONION, Decimal("6.00")),
]

PLACEHOLDER_COLOR = (214, 88, 44)


def _placeholder_image(name: str) -> ContentFile:
    buf = BytesIO()
    Image.new("RGB", (64, 64), PLACEHOLDER_COLOR).save(buf, format="PNG")
    slug = "".join(c if c.isalnum() else "-" for c in name.lower()).strip("-")
    return ContentFile(buf.getvalue(), name=f"{slug or 'item'}.png")


class Command(BaseCommand):
    help = "Seed demo menu categories/items with sizes and extras (idempotent) and clear the menu cache."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Do not write changes.")

    @transaction.atomic
    def handle(self, *args, **options):
        dry_run = bool(options["dry_run"])

        created = 0
        updated = 0

        category_order = 0
        for category_name, items in MENU:
            category_order += 10
            if dry_run:
                self.stdout.write(f"[DRY] CATEGORY: {category_name}")
                for name, _description, price in items:
                    self.stdout.write(f"   [DRY] - {name} ({price})")
                continue

            category, was_created = Category.objects.update_or_create(
                name=category_name,
                defaults={"order": category_order},
            )
            created += 1 if was_created else 0
            updated += 0 if was_created else 1

            item_order = 0
            for name, description, price in items:
                item_order += 10
                product = Product.objects.filter(category=category, name=name).first()
                if product is None:
                    product = Product(category=category, name=name)
                    product.image = _placeholder_image(name)
                    created += 1
                else:
                    updated += 1
                product.description = description
                product.base_price = Decimal(price)
                product.order = item_order
                product.save()

                if category_name in SIZED_CATEGORIES:
                    for size_name, size_price in SIZE_PRICES:
                        Size.objects.update_or_create(product=product, name=size_name, defaults={"price": size_price})
                    for extra_name, extra_price in EXTRA_PRICES:
                        Extra.objects.update_or_create(product=product, name=extra_name, defaults={"price": extra_price})

        if not dry_run:
            invalidate_menu_cache()
            self.stdout.write(self.style.SUCCESS("Cleared menu cache."))

        self.stdout.write(self.style.SUCCESS(f"Done. created={created} updated={updated} dry_run={dry_run}"))
