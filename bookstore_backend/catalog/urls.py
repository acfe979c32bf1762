# catalog/urls.py

from django.urls import path

from catalog.views import LowStockBooksView

urlpatterns = [
    path("admin/books/low-stock/", LowStockBooksView.as_view(), name="books-low-stock"),
]
