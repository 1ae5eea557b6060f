# dashboards/forms.py
from __future__ import annotations

from django import forms
from django.forms import inlineformset_factory

from catalog.models import Category, Extra, Product, Size


class CategoryForm(forms.ModelForm):
    """Add / rename a menu category from the admin dashboard."""

    class Meta:
        model = Category
        fields = ["name", "order"]
        widgets = {
            "name": forms.TextInput(attrs={"placeholder": "Category name"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["order"].required = False

    def clean_name(self) -> str:
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Category name is required.")
        return name

    def clean_order(self) -> int:
        return self.cleaned_data.get("order") or 0


class ProductForm(forms.ModelForm):
    """
    Menu item editor. The image is required when adding; on edit an empty
    upload keeps the current image.
    """

    class Meta:
        model = Product
        fields = ["category", "name", "description", "base_price", "order", "image"]
        widgets = {
            "name": forms.TextInput(attrs={"placeholder": "Item name"}),
            "description": forms.Textarea(attrs={"rows": 3}),
            "base_price": forms.NumberInput(attrs={"step": "0.01", "min": "0"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["category"].queryset = Category.objects.order_by("order", "name")
        self.fields["category"].empty_label = "Select a category"
        self.fields["order"].required = False

    def clean_order(self) -> int:
        return self.cleaned_data.get("order") or 0


SizeFormSet = inlineformset_factory(
    Product,
    Size,
    fields=["name", "price"],
    extra=1,
    can_delete=True,
    max_num=len(Size.Name.choices),
    validate_max=True,
)

ExtraFormSet = inlineformset_factory(
    Product,
    Extra,
    fields=["name", "price"],
    extra=1,
    can_delete=True,
    max_num=len(Extra.Name.choices),
    validate_max=True,
)
