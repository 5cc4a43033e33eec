# partners/api/views.py

"""
PATH: partners/api/views.py

CUSTOMERS / SUPPLIERS API

GET    /api/customers/         ?search=&status=(active|inactive|all)&page=&limit=
POST   /api/customers/         creates the customer, then its receivable account
GET    /api/customers/{id}/
PUT    /api/customers/{id}/    opening_balance is ignored after creation
PATCH  /api/customers/{id}/
DELETE /api/customers/{id}/

Same routes under /api/suppliers/ (payable account, SUP-<NNN> codes).

Create responses carry the ledger setup outcome:
    {..., "account_setup": {"status": "ok" | "skipped" | "failed", ...}}
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import DjangoModelPermissions, IsAuthenticated
from rest_framework.response import Response

from accounting.api.pagination import LedgerPagination
from partners.api.filters import CustomerFilter, SupplierFilter
from partners.api.serializers import CustomerSerializer, SupplierSerializer
from partners.models import Customer, Supplier
from partners.services.exceptions import PartnerError
from partners.services.partner_service import create_customer, create_supplier


def _bad_request(exc):
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return Response({"error": detail}, status=status.HTTP_400_BAD_REQUEST)
    return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class _PartnerViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, DjangoModelPermissions]
    pagination_class = LedgerPagination

    # (serializer data) -> (partner, setup outcome)
    create_partner = None

    def create(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            partner, setup = self.create_partner(**s.validated_data)
        except (PartnerError, DjangoValidationError) as exc:
            return _bad_request(exc)

        partner = self.get_queryset().get(pk=partner.pk)
        body = dict(self.get_serializer(partner).data)
        body["account_setup"] = setup
        return Response(body, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        try:
            return super().update(request, *args, **kwargs)
        except DjangoValidationError as exc:
            return _bad_request(exc)

    def destroy(self, request, *args, **kwargs):
        super().destroy(request, *args, **kwargs)
        return Response(
            {"message": f"{self.queryset.model._meta.verbose_name.title()} deleted successfully"},
            status=status.HTTP_200_OK,
        )


@extend_schema(tags=["customers"])
class CustomerViewSet(_PartnerViewSet):
    serializer_class = CustomerSerializer
    filterset_class = CustomerFilter
    queryset = Customer.objects.select_related("account").order_by("-created_at")

    create_partner = staticmethod(create_customer)


@extend_schema(tags=["suppliers"])
class SupplierViewSet(_PartnerViewSet):
    serializer_class = SupplierSerializer
    filterset_class = SupplierFilter
    queryset = Supplier.objects.select_related("account").order_by("-created_at")

    create_partner = staticmethod(create_supplier)
