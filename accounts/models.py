from __future__ import annotations

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models


phone_validator = RegexValidator(
    regex=r"^\+?[1-9]\d{1,14}$",
    message="Enter a valid phone number (international format, digits only).",
)

postal_code_validator = RegexValidator(
    regex=r"^\d{5,10}$",
    message="Enter a valid postal code (5 to 10 digits).",
)


class Profile(models.Model):
    """Customer profile.

    Extends AUTH_USER_MODEL with the delivery details used at checkout and the
    role the request gateway checks.

    Roles:
      - USER: default for every registered account
      - ADMIN: full access to the admin dashboard (superusers/staff count as ADMIN too)

    Notes:
      - Email is the login identifier and is mirrored into User.username.
      - Profile is created automatically via signal.
    """

    class Role(models.TextChoices):
        USER = "USER", "User"
        ADMIN = "ADMIN", "Admin"

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")

    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)

    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, blank=True, validators=[phone_validator])
    street_address = models.CharField(max_length=255, blank=True)
    postal_code = models.CharField(max_length=10, blank=True, validators=[postal_code_validator])
    city = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)

    image = models.ImageField(upload_to="profiles/", blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["role"], name="profile_role_idx"),
        ]

    def __str__(self) -> str:
        return f"Profile<{self.user.get_username()}>"

    @property
    def display_name(self) -> str:
        return (self.name or "").strip() or self.user.email or self.user.get_username()

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def has_delivery_details(self) -> bool:
        return bool(self.phone and self.street_address and self.city and self.country)
