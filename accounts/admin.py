from __future__ import annotations

from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "name", "role", "city", "country", "updated_at")
    list_filter = ("role",)
    search_fields = ("user__email", "user__username", "name", "phone")
    readonly_fields = ("created_at", "updated_at")
