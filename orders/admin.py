# orders/admin.py

from __future__ import annotations

from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ("name", "size_name", "extras", "unit_price", "quantity", "line_total", "product")
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user_email", "city", "total_price", "paid", "created_at")
    list_filter = ("paid", "created_at")
    search_fields = ("user_email", "phone", "city")
    date_hierarchy = "created_at"
    readonly_fields = ("sub_total", "delivery_fee", "total_price", "created_at", "updated_at")
    inlines = [OrderItemInline]
