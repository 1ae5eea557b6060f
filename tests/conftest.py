from __future__ import annotations

from decimal import Decimal
from io import BytesIO

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from accounts.models import Profile
from catalog.models import Category, Extra, Product, Size

PASSWORD = "secret123"


def make_image(name: str = "item.png") -> SimpleUploadedFile:
    buf = BytesIO()
    Image.new("RGB", (1, 1), (255, 0, 0)).save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


@pytest.fixture(autouse=True)
def _clear_cache():
    # Throttle counters and the menu cache live in the same locmem cache.
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def image_file():
    return make_image()


@pytest.fixture
def user(db):
    User = get_user_model()
    user = User.objects.create_user(username="customer@example.com", email="customer@example.com", password=PASSWORD)
    profile = user.profile
    profile.name = "Customer"
    profile.phone = "+201234567890"
    profile.street_address = "1 Nile St"
    profile.postal_code = "11511"
    profile.city = "Cairo"
    profile.country = "Egypt"
    profile.save()
    return user


@pytest.fixture
def admin_user(db):
    User = get_user_model()
    user = User.objects.create_user(username="admin@example.com", email="admin@example.com", password=PASSWORD)
    Profile.objects.filter(user=user).update(role=Profile.Role.ADMIN, name="Admin")
    user.refresh_from_db()
    return user


@pytest.fixture
def user_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.fixture
def category(db):
    return Category.objects.create(name="Pizza", order=1)


@pytest.fixture
def pizza(category):
    product = Product.objects.create(
        category=category,
        name="Margherita",
        description="Tomato and mozzarella.",
        base_price=Decimal("8.00"),
        image=make_image("margherita.png"),
        order=1,
    )
    Size.objects.create(product=product, name=Size.Name.SMALL, price=Decimal("0.00"))
    Size.objects.create(product=product, name=Size.Name.MEDIUM, price=Decimal("2.00"))
    Size.objects.create(product=product, name=Size.Name.LARGE, price=Decimal("4.00"))
    Extra.objects.create(product=product, name=Extra.Name.CHEESE, price=Decimal("2.00"))
    Extra.objects.create(product=product, name=Extra.Name.TOMATO, price=Decimal("4.00"))
    Extra.objects.create(product=product, name=Extra.Name.ONION, price=Decimal("6.00"))
    return product


@pytest.fixture
def drink(db):
    drinks = Category.objects.create(name="Drinks", order=2)
    return Product.objects.create(
        category=drinks,
        name="Lemonade",
        description="Fresh.",
        base_price=Decimal("3.00"),
        image=make_image("lemonade.png"),
        order=1,
    )
