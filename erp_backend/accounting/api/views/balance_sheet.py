# PATH: accounting/api/views/balance_sheet.py

"""
PATH: accounting/api/views/balance_sheet.py

BALANCE SHEET API VIEW

GET /api/financial/balance-sheet/?as_of_date=YYYY-MM-DD   (alias: ?date=, also DD/MM/YY)

- Permission-gated: requires accounting.view_account
- Missing or invalid date -> 400 {"error": ...}
"""

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.balance_sheet_service import (
    generate_balance_sheet,
    parse_as_of_date,
)
from accounting.services.exceptions import AccountingServiceError

logger = logging.getLogger(__name__)


class BalanceSheetView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["financial"],
        parameters=[
            OpenApiParameter(
                name="as_of_date",
                type=OpenApiTypes.STR,
                required=False,
                description="Cutoff date, inclusive (YYYY-MM-DD or DD/MM/YY).",
            ),
            OpenApiParameter(
                name="date",
                type=OpenApiTypes.STR,
                required=False,
                description="Alias of as_of_date.",
            ),
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm("accounting.view_account"):
            return Response(
                {"detail": "You do not have permission to view financial reports."},
                status=status.HTTP_403_FORBIDDEN,
            )

        raw = request.query_params.get("date") or request.query_params.get("as_of_date")

        try:
            as_of = parse_as_of_date(raw)
        except AccountingServiceError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            balance_sheet = generate_balance_sheet(as_of=as_of)
        except Exception:
            logger.exception("Balance sheet failed", extra={"as_of": str(as_of)})
            return Response(
                {"error": "Failed to fetch balance sheet"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"data": balance_sheet}, status=status.HTTP_200_OK)
