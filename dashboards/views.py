# dashboards/views.py

from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Prefetch, Sum
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.forms import AdminUserForm
from accounts.models import Profile
from accounts.permissions import admin_required
from catalog.models import Category, Product
from catalog.services import invalidate_menu_cache
from orders.models import Order, OrderItem

from .forms import CategoryForm, ExtraFormSet, ProductForm, SizeFormSet

logger = logging.getLogger(__name__)

User = get_user_model()

RECENT_ORDERS = 10


# ============================================================
# Overview
# ============================================================
@admin_required
def dashboard_home(request, locale: str):
    totals = Order.objects.aggregate(revenue=Sum("total_price"))
    context = {
        "category_count": Category.objects.count(),
        "product_count": Product.objects.count(),
        "user_count": User.objects.count(),
        "order_count": Order.objects.count(),
        "revenue": totals.get("revenue") or 0,
        "recent_orders": Order.objects.select_related("user").order_by("-created_at")[:RECENT_ORDERS],
    }
    return render(request, "dashboards/home.html", context)


# ============================================================
# Categories
# ============================================================
@admin_required
def category_list(request, locale: str):
    if request.method == "POST":
        form = CategoryForm(request.POST)
        if form.is_valid():
            category = form.save()
            invalidate_menu_cache()
            logger.info("category created id=%s", category.pk)
            messages.success(request, "Category added.")
            return redirect("dashboards:categories", locale=locale)
        messages.error(request, "Please fix the errors below and try again.")
    else:
        form = CategoryForm()

    categories = Category.objects.annotate(product_count=Count("products")).order_by("order", "name")
    return render(request, "dashboards/categories.html", {"form": form, "categories": categories})


@admin_required
def category_edit(request, locale: str, pk: int):
    category = get_object_or_404(Category, pk=pk)

    if request.method == "POST":
        form = CategoryForm(request.POST, instance=category)
        if form.is_valid():
            form.save()
            invalidate_menu_cache()
            logger.info("category updated id=%s", category.pk)
            messages.success(request, "Category updated.")
            return redirect("dashboards:categories", locale=locale)
        messages.error(request, "Please fix the errors below and try again.")
    else:
        form = CategoryForm(instance=category)

    return render(request, "dashboards/category_form.html", {"form": form, "category": category})


@admin_required
@require_POST
def category_delete(request, locale: str, pk: int):
    category = get_object_or_404(Category, pk=pk)
    category_id = category.pk
    category.delete()
    invalidate_menu_cache()
    logger.info("category deleted id=%s", category_id)
    messages.success(request, "Category deleted.")
    return redirect("dashboards:categories", locale=locale)


# ============================================================
# Menu items
# ============================================================
@admin_required
def product_list(request, locale: str):
    categories = Category.objects.order_by("order", "name").prefetch_related(
        Prefetch("products", queryset=Product.objects.order_by("order", "name"))
    )
    return render(request, "dashboards/products.html", {"categories": categories})


def _product_form_view(request, locale: str, product: Product | None):
    instance = product or Product()

    if request.method == "POST":
        form = ProductForm(request.POST, request.FILES, instance=instance)
        sizes = SizeFormSet(request.POST, instance=instance, prefix="sizes")
        extras = ExtraFormSet(request.POST, instance=instance, prefix="extras")
        if form.is_valid() and sizes.is_valid() and extras.is_valid():
            with transaction.atomic():
                saved = form.save()
                sizes.instance = saved
                extras.instance = saved
                sizes.save()
                extras.save()
            invalidate_menu_cache()
            logger.info("menu item %s id=%s", "updated" if product else "created", saved.pk)
            messages.success(request, "Menu item saved.")
            return redirect("dashboards:products", locale=locale)
        messages.error(request, "Please fix the errors below and try again.")
    else:
        form = ProductForm(instance=instance)
        sizes = SizeFormSet(instance=instance, prefix="sizes")
        extras = ExtraFormSet(instance=instance, prefix="extras")

    return render(
        request,
        "dashboards/product_form.html",
        {"form": form, "sizes_formset": sizes, "extras_formset": extras, "product": product},
    )


@admin_required
def product_create(request, locale: str):
    return _product_form_view(request, locale, None)


@admin_required
def product_edit(request, locale: str, pk: int):
    product = get_object_or_404(Product, pk=pk)
    return _product_form_view(request, locale, product)


@admin_required
@require_POST
def product_delete(request, locale: str, pk: int):
    product = get_object_or_404(Product, pk=pk)
    product_id = product.pk
    product.delete()
    invalidate_menu_cache()
    logger.info("menu item deleted id=%s", product_id)
    messages.success(request, "Menu item deleted.")
    return redirect("dashboards:products", locale=locale)


# ============================================================
# Users
# ============================================================
@admin_required
def user_list(request, locale: str):
    users = User.objects.select_related("profile").order_by("-date_joined")
    return render(request, "dashboards/users.html", {"users": users})


@admin_required
def user_edit(request, locale: str, pk: int):
    user = get_object_or_404(User, pk=pk)
    profile, _ = Profile.objects.get_or_create(user=user)

    if request.method == "POST":
        form = AdminUserForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            form.save()
            logger.info("user updated id=%s role=%s", user.pk, profile.role)
            messages.success(request, "User updated.")
            return redirect("dashboards:users", locale=locale)
        messages.error(request, "Please fix the errors below and try again.")
    else:
        form = AdminUserForm(instance=profile)

    return render(request, "dashboards/user_form.html", {"form": form, "edited_user": user})


@admin_required
@require_POST
def user_delete(request, locale: str, pk: int):
    user = get_object_or_404(User, pk=pk)
    if user.pk == request.user.pk:
        messages.error(request, "You can't delete your own account.")
        return redirect("dashboards:users", locale=locale)

    user_id = user.pk
    user.delete()
    logger.info("user deleted id=%s by=%s", user_id, request.user.pk)
    messages.success(request, "User deleted.")
    return redirect("dashboards:users", locale=locale)


# ============================================================
# Orders
# ============================================================
@admin_required
def order_list(request, locale: str):
    orders = (
        Order.objects.select_related("user")
        .prefetch_related(Prefetch("items", queryset=OrderItem.objects.order_by("id")))
        .order_by("-created_at")
    )
    return render(request, "dashboards/orders.html", {"orders": orders})
