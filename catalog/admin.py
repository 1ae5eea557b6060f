from __future__ import annotations

from django.contrib import admin

from .models import Category, Extra, Product, Size
from .services import invalidate_menu_cache


class MenuCacheAdminMixin:
    """Django-admin edits go through the same cache invalidation as the dashboard."""

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_menu_cache()

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        invalidate_menu_cache()

    def delete_model(self, request, obj):
        super().delete_model(request, obj)
        invalidate_menu_cache()

    def delete_queryset(self, request, queryset):
        super().delete_queryset(request, queryset)
        invalidate_menu_cache()


@admin.register(Category)
class CategoryAdmin(MenuCacheAdminMixin, admin.ModelAdmin):
    list_display = ("name", "order", "updated_at")
    list_editable = ("order",)
    search_fields = ("name",)
    ordering = ("order", "name")
    readonly_fields = ("created_at", "updated_at")


class SizeInline(admin.TabularInline):
    model = Size
    extra = 0


class ExtraInline(admin.TabularInline):
    model = Extra
    extra = 0


@admin.register(Product)
class ProductAdmin(MenuCacheAdminMixin, admin.ModelAdmin):
    list_display = ("name", "category", "base_price", "order", "updated_at")
    list_filter = ("category",)
    search_fields = ("name", "description")
    list_editable = ("order",)
    inlines = [SizeInline, ExtraInline]

    fieldsets = (
        ("Core", {"fields": ("category", "name", "description", "image")}),
        ("Pricing & display", {"fields": ("base_price", "order")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )
    readonly_fields = ("created_at", "updated_at")
