"""
PATH: accounting/api/views/recalculate_balances.py

POST /api/accounting/recalculate-balances/

Rebuilds every Account.current_balance from the posted ledger.
Requires accounting.change_account.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.balance_service import recalculate_all_balances


class RecalculateBalancesView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], request=None, responses={200: dict})
    def post(self, request):
        if not request.user.has_perm("accounting.change_account"):
            return Response(
                {"detail": "You do not have permission to recalculate balances."},
                status=status.HTTP_403_FORBIDDEN,
            )

        count = recalculate_all_balances()

        return Response(
            {
                "success": True,
                "message": f"Recalculated balances for {count} accounts",
            },
            status=status.HTTP_200_OK,
        )
