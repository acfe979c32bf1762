# delivery/views.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from delivery.serializers import PublicDeliveryPartnerSerializer
from delivery.services.delivery_fees import active_delivery_partners
from orders.views.errors import PublicPollThrottle


class PublicDeliveryPartnersView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(responses={200: PublicDeliveryPartnerSerializer(many=True)}, tags=["Public"])
    def get(self, request):
        partners = active_delivery_partners()
        return Response(
            PublicDeliveryPartnerSerializer(partners, many=True).data,
            status=status.HTTP_200_OK,
        )
