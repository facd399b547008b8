"""
Farm Market Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("products", views.products_view),
    path("products/count", views.product_count_view),
    path("products/<int:product_id>", views.product_detail_view),
    path("products/<int:product_id>/buy", views.product_buy_view),
    path("products/<int:product_id>/update", views.product_update_view),
    path("products/<int:product_id>/remove", views.product_remove_view),
    path("products/<int:product_id>/ownership", views.product_ownership_view),
]
