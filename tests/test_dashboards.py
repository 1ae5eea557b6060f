from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from accounts.models import Profile
from catalog import services
from catalog.models import Category, Product

from .conftest import make_image

pytestmark = pytest.mark.django_db

User = get_user_model()


def _product_post(category, **overrides):
    data = {
        "category": category.pk,
        "name": "Pepperoni",
        "description": "Spicy.",
        "base_price": "10.00",
        "order": "2",
        "sizes-TOTAL_FORMS": "2",
        "sizes-INITIAL_FORMS": "0",
        "sizes-MIN_NUM_FORMS": "0",
        "sizes-MAX_NUM_FORMS": "3",
        "sizes-0-name": "SMALL",
        "sizes-0-price": "0.00",
        "sizes-1-name": "LARGE",
        "sizes-1-price": "4.00",
        "extras-TOTAL_FORMS": "1",
        "extras-INITIAL_FORMS": "0",
        "extras-MIN_NUM_FORMS": "0",
        "extras-MAX_NUM_FORMS": "5",
        "extras-0-name": "BACON",
        "extras-0-price": "3.00",
    }
    data.update(overrides)
    return data


def test_overview(admin_client, pizza):
    response = admin_client.get("/en/admin/")
    assert response.status_code == 200
    assert response.context["product_count"] == 1


def test_category_crud_invalidates_menu(admin_client):
    assert services.get_categories() == []

    response = admin_client.post("/en/admin/categories/", {"name": "Pasta", "order": "3"})
    assert response["Location"] == "/en/admin/categories/"
    category = Category.objects.get()
    assert [c.name for c in services.get_categories()] == ["Pasta"]

    admin_client.post(f"/en/admin/categories/{category.pk}/edit/", {"name": "Pastas", "order": "3"})
    assert [c.name for c in services.get_categories()] == ["Pastas"]

    admin_client.post(f"/en/admin/categories/{category.pk}/delete/")
    assert services.get_categories() == []


def test_category_name_required(admin_client):
    response = admin_client.post("/en/admin/categories/", {"name": "  "})
    assert response.status_code == 200
    assert "name" in response.context["form"].errors
    assert Category.objects.count() == 0


def test_create_menu_item_with_sizes_and_extras(admin_client, category):
    data = _product_post(category, image=make_image("pepperoni.png"))
    response = admin_client.post("/en/admin/menu-items/new/", data)
    assert response.status_code == 302, response.context["form"].errors

    product = Product.objects.get(name="Pepperoni")
    assert product.base_price == Decimal("10.00")
    assert sorted(s.name for s in product.sizes.all()) == ["LARGE", "SMALL"]
    assert [e.name for e in product.extras.all()] == ["BACON"]
    assert [p.name for p in services.get_products()] == ["Pepperoni"]


def test_create_menu_item_requires_image(admin_client, category):
    response = admin_client.post("/en/admin/menu-items/new/", _product_post(category))
    assert response.status_code == 200
    assert "image" in response.context["form"].errors
    assert Product.objects.count() == 0


def test_edit_menu_item_keeps_image_and_updates_sizes(admin_client, pizza):
    small = pizza.sizes.get(name="SMALL")
    data = {
        "category": pizza.category_id,
        "name": "Margherita XL",
        "description": pizza.description,
        "base_price": "9.00",
        "order": "1",
        "sizes-TOTAL_FORMS": "1",
        "sizes-INITIAL_FORMS": "1",
        "sizes-MIN_NUM_FORMS": "0",
        "sizes-MAX_NUM_FORMS": "3",
        "sizes-0-id": small.pk,
        "sizes-0-name": "SMALL",
        "sizes-0-price": "1.00",
        "extras-TOTAL_FORMS": "0",
        "extras-INITIAL_FORMS": "0",
        "extras-MIN_NUM_FORMS": "0",
        "extras-MAX_NUM_FORMS": "5",
    }
    response = admin_client.post(f"/en/admin/menu-items/{pizza.pk}/edit/", data)
    assert response.status_code == 302

    pizza.refresh_from_db()
    assert pizza.name == "Margherita XL"
    assert pizza.image
    small.refresh_from_db()
    assert small.price == Decimal("1.00")


def test_delete_menu_item(admin_client, pizza):
    response = admin_client.post(f"/en/admin/menu-items/{pizza.pk}/delete/")
    assert response["Location"] == "/en/admin/menu-items/"
    assert not Product.objects.filter(pk=pizza.pk).exists()


def test_edit_user_role(admin_client, user):
    response = admin_client.post(
        f"/en/admin/users/{user.pk}/edit/",
        {"name": "Promoted", "email": user.email, "role": "ADMIN"},
    )
    assert response.status_code == 302
    assert Profile.objects.get(user=user).role == Profile.Role.ADMIN


def test_admin_cannot_delete_self(admin_client, admin_user):
    admin_client.post(f"/en/admin/users/{admin_user.pk}/delete/")
    assert User.objects.filter(pk=admin_user.pk).exists()


def test_admin_deletes_other_user(admin_client, user):
    admin_client.post(f"/en/admin/users/{user.pk}/delete/")
    assert not User.objects.filter(pk=user.pk).exists()


def test_lists_render(admin_client, pizza, user):
    for path in ("/en/admin/categories/", "/en/admin/menu-items/", "/en/admin/users/", "/en/admin/orders/"):
        assert admin_client.get(path).status_code == 200, path


def test_delete_requires_post(admin_client, pizza):
    assert admin_client.get(f"/en/admin/menu-items/{pizza.pk}/delete/").status_code == 405
