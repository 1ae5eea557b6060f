from __future__ import annotations

from django import forms

from accounts.models import phone_validator, postal_code_validator

from .services import DeliveryDetails


class CheckoutForm(forms.Form):
    """
    Delivery details. `email` is asked for when there is no account email to
    order under: guests, and accounts created without one (createsuperuser).
    """

    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={"placeholder": "Email"}))
    phone = forms.CharField(max_length=20, validators=[phone_validator])
    street_address = forms.CharField(max_length=255)
    postal_code = forms.CharField(max_length=10, validators=[postal_code_validator])
    city = forms.CharField(max_length=120)
    country = forms.CharField(max_length=120)

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)
        if self.needs_email:
            self.fields["email"].required = True
        else:
            del self.fields["email"]

    @property
    def is_guest(self) -> bool:
        return not getattr(self.user, "is_authenticated", False)

    @property
    def needs_email(self) -> bool:
        return self.is_guest or not (getattr(self.user, "email", "") or "").strip()

    @classmethod
    def initial_from_profile(cls, user) -> dict:
        profile = getattr(user, "profile", None) if getattr(user, "is_authenticated", False) else None
        if profile is None:
            return {}
        return {
            "phone": profile.phone,
            "street_address": profile.street_address,
            "postal_code": profile.postal_code,
            "city": profile.city,
            "country": profile.country,
        }

    def delivery(self) -> DeliveryDetails:
        data = self.cleaned_data
        return DeliveryDetails(
            phone=data["phone"].strip(),
            street_address=data["street_address"].strip(),
            postal_code=data["postal_code"].strip(),
            city=data["city"].strip(),
            country=data["country"].strip(),
        )

    def order_email(self) -> str:
        if self.needs_email:
            return self.cleaned_data["email"]
        return self.user.email
