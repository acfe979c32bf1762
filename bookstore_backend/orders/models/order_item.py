# orders/models/order_item.py

"""
ORDER ITEM (SNAPSHOT)

`title` and `price` are copied from the catalog when the order is placed.
The book FK is only a back-reference: deleting the book leaves the line
intact with `book = None`.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from .order import Order


class OrderItem(models.Model):
    id = models.BigAutoField(primary_key=True)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )

    book = models.ForeignKey(
        "catalog.Book",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    title = models.CharField(max_length=180)
    price = models.DecimalField(max_digits=12, decimal_places=3)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # insertion order of the cart
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "position"],
                name="orders_item_order_position_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="orders_item_quantity_positive",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return Decimal(str(self.price)) * Decimal(int(self.quantity or 0))

    def __str__(self):
        return f"{self.title} x {self.quantity}"
