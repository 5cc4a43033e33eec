"""
PATH: accounting/api/views/ledgers.py

LEDGER LISTING API VIEWS (READ-ONLY)

GET /api/financial/general-journal/  ?search_by=(voucher|account|description)&search=&from_date=&to_date=&page=&limit=
GET /api/financial/ledgers/          ?main_group=&sub_group=&account=&from_date=&to_date=&page=&limit=
GET /api/accounting/general-ledger/  ?account_code=&type=&date_from=&date_to=

Paginated bodies: {"data": [...], "pagination": {page, limit, total, totalPages}}
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.params import parse_date_window, parse_int_param
from accounting.services.ledger_report_service import (
    DEFAULT_PAGE_SIZE,
    general_journal,
    general_ledger,
    ledgers,
    paginate,
)

logger = logging.getLogger(__name__)

REPORT_PERMISSION = "accounting.view_account"

PAGE_PARAMETERS = [
    OpenApiParameter(name="page", type=int, required=False),
    OpenApiParameter(name="limit", type=int, required=False),
]


def _forbidden():
    return Response(
        {"detail": "You do not have permission to view ledgers."},
        status=status.HTTP_403_FORBIDDEN,
    )


def _page_args(query_params) -> dict:
    return {
        "page": parse_int_param(query_params.get("page"), "page", default=1),
        "limit": parse_int_param(
            query_params.get("limit"), "limit", default=DEFAULT_PAGE_SIZE
        ),
    }


class GeneralJournalView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["financial"],
        parameters=[
            OpenApiParameter(name="search_by", type=str, required=False),
            OpenApiParameter(name="search", type=str, required=False),
            OpenApiParameter(name="from_date", type=str, required=False),
            OpenApiParameter(name="to_date", type=str, required=False),
            *PAGE_PARAMETERS,
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm(REPORT_PERMISSION):
            return _forbidden()

        qp = request.query_params
        try:
            from_date, to_date = parse_date_window(qp, "from_date", "to_date")
            page_args = _page_args(qp)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            rows = general_journal(
                from_date=from_date,
                to_date=to_date,
                search_by=qp.get("search_by"),
                search=qp.get("search"),
            )
        except Exception:
            logger.exception("General journal failed")
            return Response(
                {"error": "Failed to fetch general journal entries"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(paginate(rows, **page_args), status=status.HTTP_200_OK)


class LedgersView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["financial"],
        parameters=[
            OpenApiParameter(name="main_group", type=int, required=False),
            OpenApiParameter(name="sub_group", type=int, required=False),
            OpenApiParameter(name="account", type=int, required=False),
            OpenApiParameter(name="from_date", type=str, required=False),
            OpenApiParameter(name="to_date", type=str, required=False),
            *PAGE_PARAMETERS,
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm(REPORT_PERMISSION):
            return _forbidden()

        qp = request.query_params
        try:
            from_date, to_date = parse_date_window(qp, "from_date", "to_date")
            main_group = parse_int_param(qp.get("main_group"), "main_group")
            sub_group = parse_int_param(qp.get("sub_group"), "sub_group")
            account = parse_int_param(qp.get("account"), "account")
            page_args = _page_args(qp)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            rows = ledgers(
                main_group=main_group,
                sub_group=sub_group,
                account=account,
                from_date=from_date,
                to_date=to_date,
            )
        except Exception:
            logger.exception("Ledgers failed", extra={"account": account})
            return Response(
                {"error": "Failed to fetch ledger entries"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(paginate(rows, **page_args), status=status.HTTP_200_OK)


class GeneralLedgerView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter(name="account_code", type=str, required=False),
            OpenApiParameter(name="type", type=str, required=False),
            OpenApiParameter(name="date_from", type=str, required=False),
            OpenApiParameter(name="date_to", type=str, required=False),
        ],
        responses={200: dict},
    )
    def get(self, request):
        if not request.user.has_perm(REPORT_PERMISSION):
            return _forbidden()

        qp = request.query_params
        try:
            date_from, date_to = parse_date_window(qp, "date_from", "date_to")
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            data = general_ledger(
                account_code=(qp.get("account_code") or "").strip() or None,
                account_type=(qp.get("type") or "").strip() or None,
                date_from=date_from,
                date_to=date_to,
            )
        except Exception:
            logger.exception("General ledger failed")
            return Response(
                {"error": "Failed to fetch general ledger"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(data, status=status.HTTP_200_OK)
