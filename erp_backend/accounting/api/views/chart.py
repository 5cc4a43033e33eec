# accounting/api/views/chart.py

"""
PATH: accounting/api/views/chart.py

CHART OF ACCOUNTS API

/api/accounting/main-groups/   CRUD, ordered by display_order
/api/accounting/subgroups/     CRUD, ?main_group=&is_active=
/api/accounting/accounts/      CRUD, ?subgroup=&status=&main_group=

Rules:
- Fixed main groups (1-9) and fixed subgroups cannot be changed (403)
- Account codes start with the subgroup code; blank code -> next in sequence
- Protected accounts and accounts with ledger activity cannot be deleted
- Model permissions (DjangoModelPermissions) gate every write
"""

from django.db.models import ProtectedError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import DjangoModelPermissions, IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import AccountFilter, SubgroupFilter
from accounting.api.serializers.chart import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    MainGroupSerializer,
    SubgroupSerializer,
)
from accounting.models.account import Account
from accounting.models.chart import MainGroup, Subgroup
from accounting.services.chart_service import (
    FixedChartNodeError,
    assert_account_deletable,
    assert_main_group_editable,
    assert_subgroup_editable,
    create_account,
)
from accounting.services.exceptions import AccountingServiceError


def _forbidden(exc):
    return Response({"error": str(exc)}, status=status.HTTP_403_FORBIDDEN)


class _FixedNodeViewSet(viewsets.ModelViewSet):
    """Shared update/delete guards for seeded chart nodes."""

    permission_classes = [IsAuthenticated, DjangoModelPermissions]
    pagination_class = None
    guard = None

    def update(self, request, *args, **kwargs):
        try:
            self.guard(self.get_object())
        except FixedChartNodeError as exc:
            return _forbidden(exc)
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            self.guard(instance)
        except FixedChartNodeError as exc:
            return _forbidden(exc)
        try:
            instance.delete()
        except ProtectedError:
            return Response(
                {"error": "This record is still referenced and cannot be deleted"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"success": True}, status=status.HTTP_200_OK)


@extend_schema(tags=["accounting"])
class MainGroupViewSet(_FixedNodeViewSet):
    queryset = MainGroup.objects.all().order_by("display_order", "code")
    serializer_class = MainGroupSerializer
    guard = staticmethod(assert_main_group_editable)


@extend_schema(tags=["accounting"])
class SubgroupViewSet(_FixedNodeViewSet):
    queryset = Subgroup.objects.select_related("main_group").order_by("code")
    serializer_class = SubgroupSerializer
    filterset_class = SubgroupFilter
    guard = staticmethod(assert_subgroup_editable)


@extend_schema(tags=["accounting"])
class AccountViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, DjangoModelPermissions]
    pagination_class = None
    queryset = Account.objects.select_related("subgroup__main_group").order_by("code")
    serializer_class = AccountSerializer
    filterset_class = AccountFilter

    def get_serializer_class(self):
        if self.action == "create":
            return AccountCreateSerializer
        if self.action in ("update", "partial_update"):
            return AccountUpdateSerializer
        return AccountSerializer

    @extend_schema(
        request=AccountCreateSerializer,
        responses={201: AccountSerializer, 400: dict},
    )
    def create(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            account = create_account(
                subgroup=data["subgroup"],
                code=data.get("code"),
                name=data["name"],
                description=data.get("description", ""),
                opening_balance=data.get("opening_balance"),
                status=data.get("status"),
            )
        except AccountingServiceError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AccountUpdateSerializer, responses={200: AccountSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        s = self.get_serializer(instance, data=request.data, partial=partial)
        s.is_valid(raise_exception=True)
        account = s.save()
        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        account = self.get_object()
        try:
            assert_account_deletable(account)
        except AccountingServiceError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        account.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)
