from __future__ import annotations

from django import forms
from django.contrib.auth import authenticate, get_user_model
from django.db.models import Q

from .models import Profile


User = get_user_model()

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 40


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SignInForm(forms.Form):
    """Email/password sign-in. The user's email doubles as their username."""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"autocomplete": "email", "placeholder": "hello@example.com"}),
    )
    password = forms.CharField(
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password", "placeholder": "Password"}),
    )

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean_email(self) -> str:
        return normalize_email(self.cleaned_data.get("email"))

    def clean(self):
        cleaned = super().clean()
        email = cleaned.get("email")
        password = cleaned.get("password")
        if not email or not password:
            return cleaned

        # Accounts from createsuperuser keep a free-form username; match on email too.
        account = User.objects.filter(Q(username__iexact=email) | Q(email__iexact=email)).order_by("pk").first()
        if account is None:
            raise forms.ValidationError("No account found for this email.", code="user_not_found")

        self.user_cache = authenticate(self.request, username=account.get_username(), password=password)
        if self.user_cache is None:
            raise forms.ValidationError("Incorrect password.", code="incorrect_password")
        return cleaned

    def get_user(self):
        return self.user_cache


class SignUpForm(forms.Form):
    """
    Registration form.

    - name, email, password + confirmation
    - email must be unused (case-insensitive)
    - new accounts always start with the USER role
    """

    name = forms.CharField(
        max_length=150,
        widget=forms.TextInput(attrs={"autocomplete": "name", "placeholder": "Your name"}),
    )
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"autocomplete": "email", "placeholder": "hello@example.com"}),
    )
    password = forms.CharField(
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}),
    )
    confirm_password = forms.CharField(
        min_length=PASSWORD_MIN_LENGTH,
        widget=forms.PasswordInput(attrs={"autocomplete": "new-password"}),
    )

    def clean_name(self) -> str:
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Name is required.")
        return name

    def clean_email(self) -> str:
        email = normalize_email(self.cleaned_data.get("email"))
        if User.objects.filter(username__iexact=email).exists() or User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("An account with this email already exists.", code="user_exists")
        return email

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get("password")
        confirm = cleaned.get("confirm_password")
        if password and confirm and password != confirm:
            self.add_error("confirm_password", "Passwords do not match.")
        return cleaned

    def save(self):
        email = self.cleaned_data["email"]
        user = User.objects.create_user(
            username=email,
            email=email,
            password=self.cleaned_data["password"],
        )
        # Profile is created via signal; seed it with the registration name.
        profile = user.profile
        profile.name = self.cleaned_data["name"]
        profile.save(update_fields=["name", "updated_at"])
        return user


class ProfileForm(forms.ModelForm):
    """Profile editor used by customers (own profile) and admins (any user)."""

    email = forms.EmailField(widget=forms.EmailInput(attrs={"placeholder": "Email"}))

    class Meta:
        model = Profile
        fields = [
            "name",
            "phone",
            "street_address",
            "postal_code",
            "city",
            "country",
            "image",
        ]
        widgets = {
            "name": forms.TextInput(attrs={"placeholder": "Name"}),
            "phone": forms.TextInput(attrs={"placeholder": "+201234567890"}),
            "street_address": forms.TextInput(attrs={"placeholder": "Street address"}),
            "postal_code": forms.TextInput(attrs={"placeholder": "Postal code"}),
            "city": forms.TextInput(attrs={"placeholder": "City"}),
            "country": forms.TextInput(attrs={"placeholder": "Country"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["name"].required = True
        if self.instance and self.instance.pk:
            self.fields["email"].initial = self.instance.user.email

    def clean_email(self) -> str:
        email = normalize_email(self.cleaned_data.get("email"))
        others = User.objects.filter(Q(username__iexact=email) | Q(email__iexact=email)).exclude(pk=self.instance.user_id)
        if others.exists():
            raise forms.ValidationError("An account with this email already exists.", code="user_exists")
        return email

    def save(self, commit: bool = True):
        profile = super().save(commit=False)
        user = profile.user
        email = self.cleaned_data["email"]
        user.email = email
        user.username = email
        if commit:
            user.save(update_fields=["email", "username"])
            profile.save()
        return profile


class AdminUserForm(ProfileForm):
    """Admin-side user editor: same fields plus the role switch."""

    class Meta(ProfileForm.Meta):
        fields = ProfileForm.Meta.fields + ["role"]
        widgets = {**ProfileForm.Meta.widgets, "role": forms.Select()}
