# delivery/urls.py

from django.urls import path

from delivery.views import PublicDeliveryPartnersView

urlpatterns = [
    path("delivery/public/", PublicDeliveryPartnersView.as_view(), name="delivery-public"),
]
