from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.management import call_command

from catalog import services
from catalog.models import Category, Extra, Product, Size
from orders.models import Order, OrderItem

from .conftest import make_image

pytestmark = pytest.mark.django_db


def _order_with(*products):
    order = Order.objects.create(
        user_email="x@example.com",
        phone="+201234567890",
        street_address="1 St",
        postal_code="12345",
        city="Cairo",
        country="Egypt",
    )
    for product in products:
        OrderItem.objects.create(
            order=order, product=product, name=product.name, unit_price=product.base_price, line_total=product.base_price
        )
    return order


def test_categories_sorted_by_order():
    Category.objects.create(name="Drinks", order=2)
    Category.objects.create(name="Pizza", order=1)
    assert [c.name for c in services.get_categories()] == ["Pizza", "Drinks"]


def test_products_by_category_prefetches_options(pizza, drink, django_assert_num_queries):
    categories = services.get_products_by_category()
    assert [c.name for c in categories] == ["Pizza", "Drinks"]

    # Served from cache: no further queries, relations already loaded.
    with django_assert_num_queries(0):
        cached = services.get_products_by_category()
        margherita = cached[0].products.all()[0]
        assert [s.name for s in margherita.sizes.all()] == ["SMALL", "MEDIUM", "LARGE"]
        assert len(margherita.extras.all()) == 3


def test_cache_is_invalidated_after_writes(category):
    assert services.get_products() == []
    Product.objects.create(
        category=category, name="Calzone", description="d", base_price=Decimal("9.00"), image=make_image()
    )
    # Stale until invalidated.
    assert services.get_products() == []

    services.invalidate_menu_cache()
    assert [p.name for p in services.get_products()] == ["Calzone"]


def test_get_product(pizza):
    assert services.get_product(pizza.pk).name == "Margherita"
    assert services.get_product(999999) is None


def test_best_sellers_ordered_by_order_count(pizza, drink):
    assert services.get_best_sellers() == []

    _order_with(pizza, drink)
    _order_with(drink)
    services.invalidate_menu_cache()

    assert [p.name for p in services.get_best_sellers()] == ["Lemonade", "Margherita"]
    assert [p.name for p in services.get_best_sellers(1)] == ["Lemonade"]


def test_menu_page_lists_items(client, pizza, drink):
    response = client.get("/en/menu/")
    assert response.status_code == 200
    assert b"Margherita" in response.content
    assert b"Lemonade" in response.content
    assert b"$8.00" in response.content


def test_home_shows_best_sellers(client, pizza):
    _order_with(pizza)
    response = client.get("/ar/")
    assert response.status_code == 200
    assert list(response.context["best_sellers"]) == [pizza]


def test_size_and_extra_unique_per_product(pizza):
    from django.db import IntegrityError, transaction

    with pytest.raises(IntegrityError), transaction.atomic():
        Size.objects.create(product=pizza, name=Size.Name.SMALL, price=Decimal("1.00"))
    with pytest.raises(IntegrityError), transaction.atomic():
        Extra.objects.create(product=pizza, name=Extra.Name.CHEESE, price=Decimal("1.00"))


def test_seed_menu_is_idempotent():
    call_command("seed_menu")
    first = (Category.objects.count(), Product.objects.count(), Size.objects.count(), Extra.objects.count())
    call_command("seed_menu")
    second = (Category.objects.count(), Product.objects.count(), Size.objects.count(), Extra.objects.count())

    assert first == second
    assert first[0] == 3
    margherita = Product.objects.get(name="Margherita")
    assert {s.name: s.price for s in margherita.sizes.all()} == {
        "SMALL": Decimal("0.00"),
        "MEDIUM": Decimal("2.00"),
        "LARGE": Decimal("4.00"),
    }


def test_seed_menu_dry_run_writes_nothing():
    call_command("seed_menu", "--dry-run")
    assert Category.objects.count() == 0
