"""
PATH: accounting/api/views/trial_balance.py

TRIAL BALANCE API VIEW (READ-ONLY)

GET /api/financial/trial-balance/?from_date=YYYY-MM-DD&to_date=YYYY-MM-DD

- Permission-gated: requires accounting.view_account
- Body: {"data": [rows...]}; rows carry float debit/credit
- Any failure, bad dates included, -> 500 {"error": "Failed to fetch trial balance"}
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_window
from accounting.services.trial_balance_service import TrialBalanceService

logger = logging.getLogger(__name__)

REPORT_PERMISSION = "accounting.view_account"


@extend_schema(
    tags=["financial"],
    parameters=[
        OpenApiParameter(
            name="from_date",
            type=str,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Inclusive start date (YYYY-MM-DD).",
        ),
        OpenApiParameter(
            name="to_date",
            type=str,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Inclusive end date (YYYY-MM-DD).",
        ),
    ],
    responses={200: dict},
)
class TrialBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm(REPORT_PERMISSION):
            return Response(
                {"detail": "You do not have permission to view trial balance."},
                status=status.HTTP_403_FORBIDDEN,
            )

        try:
            from_date, to_date = parse_date_window(
                request.query_params, "from_date", "to_date"
            )
            rows = TrialBalanceService().generate(from_date=from_date, to_date=to_date)
        except Exception:
            logger.exception(
                "Trial balance failed",
                extra={"query": request.query_params.dict()},
            )
            return Response(
                {"error": "Failed to fetch trial balance"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"data": rows}, status=status.HTTP_200_OK)
