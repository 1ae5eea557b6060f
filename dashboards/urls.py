# dashboards/urls.py
from django.urls import path

from . import views

app_name = "dashboards"

urlpatterns = [
    path("admin/", views.dashboard_home, name="home"),
    path("admin/categories/", views.category_list, name="categories"),
    path("admin/categories/<int:pk>/edit/", views.category_edit, name="category_edit"),
    path("admin/categories/<int:pk>/delete/", views.category_delete, name="category_delete"),
    path("admin/menu-items/", views.product_list, name="products"),
    path("admin/menu-items/new/", views.product_create, name="product_create"),
    path("admin/menu-items/<int:pk>/edit/", views.product_edit, name="product_edit"),
    path("admin/menu-items/<int:pk>/delete/", views.product_delete, name="product_delete"),
    path("admin/users/", views.user_list, name="users"),
    path("admin/users/<int:pk>/edit/", views.user_edit, name="user_edit"),
    path("admin/users/<int:pk>/delete/", views.user_delete, name="user_delete"),
    path("admin/orders/", views.order_list, name="orders"),
]
