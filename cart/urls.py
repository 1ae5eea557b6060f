from django.urls import path

from . import views

app_name = "cart"

urlpatterns = [
    path("cart/", views.cart_detail, name="detail"),
    path("cart/add/", views.cart_add, name="add"),
    path("cart/decrement/<int:product_id>/", views.cart_decrement, name="decrement"),
    path("cart/remove/<int:product_id>/", views.cart_remove, name="remove"),
    path("cart/clear/", views.cart_clear, name="clear"),
]
