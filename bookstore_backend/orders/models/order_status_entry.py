# orders/models/order_status_entry.py

"""
ORDER STATUS ENTRY (APPEND-ONLY)

One row per status change, including the initial "processing" entry written
at creation. Created once. Never updated. Never deleted on its own
(rows only go away with their order).
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from .order import Order

User = settings.AUTH_USER_MODEL


class OrderStatusEntry(models.Model):
    id = models.BigAutoField(primary_key=True)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="status_history",
    )

    status = models.CharField(max_length=32, choices=Order.Status.choices)
    note = models.CharField(max_length=500, blank=True, default="")

    updated_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_status_updates",
    )
    updated_at = models.DateTimeField(default=timezone.now)

    # 1-based position in the order's timeline
    sequence = models.PositiveIntegerField()

    class Meta:
        ordering = ["sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "sequence"],
                name="orders_status_entry_seq_uniq",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("OrderStatusEntry records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("OrderStatusEntry records cannot be deleted")

    def __str__(self):
        return f"{self.order_id} #{self.sequence} {self.status}"
