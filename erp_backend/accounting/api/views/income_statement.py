"""
PATH: accounting/api/views/income_statement.py

INCOME STATEMENT API VIEW (READ-ONLY)

GET /api/financial/income-statement/?from_date=&to_date=
Body: {"data": {"revenue": [...], "cost": [...], "expenses": [...]}}
Any failure, bad dates included, -> 500 {"error": "Failed to fetch income statement"}
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_window
from accounting.services.income_statement_service import get_income_statement

logger = logging.getLogger(__name__)


class IncomeStatementView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["financial"],
        parameters=[
            OpenApiParameter(name="from_date", type=str, required=False),
            OpenApiParameter(name="to_date", type=str, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm("accounting.view_account"):
            return Response(
                {"detail": "You do not have permission to view financial reports."},
                status=status.HTTP_403_FORBIDDEN,
            )

        try:
            from_date, to_date = parse_date_window(
                request.query_params, "from_date", "to_date"
            )
            data = get_income_statement(from_date=from_date, to_date=to_date)
        except Exception:
            logger.exception(
                "Income statement failed",
                extra={"query": request.query_params.dict()},
            )
            return Response(
                {"error": "Failed to fetch income statement"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"data": data}, status=status.HTTP_200_OK)
