# accounting/api/views/vouchers.py

"""
PATH: accounting/api/views/vouchers.py

VOUCHERS API

GET    /api/vouchers/             ?type=(payment|receipt|journal|contra|1|2|3)&status=&search=&from_date=&to_date=
POST   /api/vouchers/             balanced entries required; status "posted" posts at once
GET    /api/vouchers/{id}/
PUT    /api/vouchers/{id}/        draft only
DELETE /api/vouchers/{id}/        also removes journal entries with the same number
POST   /api/vouchers/{id}/post/   draft -> posted, refresh balances
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import VoucherFilter
from accounting.api.pagination import LedgerPagination
from accounting.api.serializers.vouchers import VoucherSerializer, VoucherWriteSerializer
from accounting.models.voucher import Voucher
from accounting.services.exceptions import AccountingServiceError
from accounting.services.voucher_service import (
    create_voucher,
    delete_voucher,
    post_voucher,
    update_voucher,
)

VOUCHER_VIEW_PERMISSION = "accounting.view_voucher"
VOUCHER_ADD_PERMISSION = "accounting.add_voucher"
VOUCHER_CHANGE_PERMISSION = "accounting.change_voucher"
VOUCHER_DELETE_PERMISSION = "accounting.delete_voucher"


def _username(user) -> str:
    return user.get_username() if user.is_authenticated else ""


def _bad_request(exc):
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return Response({"error": detail}, status=status.HTTP_400_BAD_REQUEST)
    return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(tags=["vouchers"])
class VoucherViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = VoucherSerializer
    pagination_class = LedgerPagination
    filterset_class = VoucherFilter
    http_method_names = ["get", "post", "put", "delete", "head", "options"]

    queryset = Voucher.objects.prefetch_related("entries").order_by(
        "-date", "-created_at"
    )

    def get_serializer_class(self):
        if self.action in ("create", "update"):
            return VoucherWriteSerializer
        return VoucherSerializer

    def _deny(self, message):
        return Response({"detail": message}, status=status.HTTP_403_FORBIDDEN)

    def _refetch(self, voucher):
        return self.get_queryset().get(pk=voucher.pk)

    def list(self, request, *args, **kwargs):
        if not request.user.has_perm(VOUCHER_VIEW_PERMISSION):
            return self._deny("You do not have permission to view vouchers.")
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        if not request.user.has_perm(VOUCHER_VIEW_PERMISSION):
            return self._deny("You do not have permission to view vouchers.")
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        request=VoucherWriteSerializer,
        responses={201: VoucherSerializer, 400: dict, 403: dict},
    )
    def create(self, request, *args, **kwargs):
        if not request.user.has_perm(VOUCHER_ADD_PERMISSION):
            return self._deny("You do not have permission to create vouchers.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)

        try:
            voucher = create_voucher(
                voucher_number=data["voucher_number"],
                type=data["type"],
                date=data["date"],
                entries=[dict(e) for e in data["entries"]],
                narration=data.get("narration", ""),
                cash_bank_account=data.get("cash_bank_account", ""),
                cheque_number=data.get("cheque_number", ""),
                cheque_date=data.get("cheque_date"),
                status=data.get("status", Voucher.STATUS_DRAFT),
                created_by=_username(request.user),
            )
        except (AccountingServiceError, DjangoValidationError) as exc:
            return _bad_request(exc)

        return Response(
            VoucherSerializer(self._refetch(voucher)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=VoucherWriteSerializer,
        responses={200: VoucherSerializer, 400: dict, 403: dict},
    )
    def update(self, request, *args, **kwargs):
        if not request.user.has_perm(VOUCHER_CHANGE_PERMISSION):
            return self._deny("You do not have permission to edit vouchers.")

        voucher = self.get_object()

        s = self.get_serializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)

        # Only fields present in the payload are applied.
        fields = {k: v for k, v in data.items() if k in request.data and k != "entries"}
        entries = (
            [dict(e) for e in data["entries"]] if "entries" in request.data else None
        )
        if fields.get("status") == Voucher.STATUS_POSTED:
            fields["approved_by"] = _username(request.user)

        try:
            voucher = update_voucher(voucher, entries=entries, **fields)
        except (AccountingServiceError, DjangoValidationError) as exc:
            return _bad_request(exc)

        return Response(
            VoucherSerializer(self._refetch(voucher)).data, status=status.HTTP_200_OK
        )

    def destroy(self, request, *args, **kwargs):
        if not request.user.has_perm(VOUCHER_DELETE_PERMISSION):
            return self._deny("You do not have permission to delete vouchers.")

        voucher = self.get_object()
        result = delete_voucher(voucher)
        return Response(result, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses={200: VoucherSerializer, 400: dict})
    @action(detail=True, methods=["post"], url_path="post")
    def mark_posted(self, request, pk=None):
        if not request.user.has_perm(VOUCHER_CHANGE_PERMISSION):
            return self._deny("You do not have permission to post vouchers.")

        voucher = self.get_object()

        try:
            voucher = post_voucher(voucher, approved_by=_username(request.user))
        except AccountingServiceError as exc:
            return _bad_request(exc)

        return Response(
            VoucherSerializer(self._refetch(voucher)).data, status=status.HTTP_200_OK
        )
