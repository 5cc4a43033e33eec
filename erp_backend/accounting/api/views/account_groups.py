"""
PATH: accounting/api/views/account_groups.py

GET /api/financial/account-groups/
Dropdown data: {"data": {"mainGroups", "subGroups", "accounts"}} with "<code>-<name>" labels.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.ledger_report_service import account_groups

logger = logging.getLogger(__name__)


class AccountGroupsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["financial"], responses={200: dict})
    def get(self, request):
        if not request.user.has_perm("accounting.view_account"):
            return Response(
                {"detail": "You do not have permission to view accounts."},
                status=status.HTTP_403_FORBIDDEN,
            )

        try:
            data = account_groups()
        except Exception:
            logger.exception("Account groups failed")
            return Response(
                {"error": "Failed to fetch account groups"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"data": data}, status=status.HTTP_200_OK)
