# accounting/api/views/journal_entries.py

"""
PATH: accounting/api/views/journal_entries.py

JOURNAL ENTRIES API

GET  /api/accounting/journal-entries/            ?status=&search=&from_date=&to_date=
POST /api/accounting/journal-entries/            create DRAFT (balanced lines only)
GET  /api/accounting/journal-entries/{id}/
POST /api/accounting/journal-entries/{id}/post/  draft -> posted, refresh balances

Journal entries are never edited or deleted through the API.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import JournalEntryFilter
from accounting.api.pagination import LedgerPagination
from accounting.api.serializers.journal_entries import (
    JournalEntryCreateSerializer,
    JournalEntrySerializer,
)
from accounting.models.journal import JournalEntry
from accounting.services.exceptions import AccountingServiceError
from accounting.services.journal_entry_service import (
    create_journal_entry,
    post_journal_entry,
)

JOURNAL_VIEW_PERMISSION = "accounting.view_journalentry"
JOURNAL_ADD_PERMISSION = "accounting.add_journalentry"
JOURNAL_POST_PERMISSION = "accounting.change_journalentry"


def _username(user) -> str:
    return user.get_username() if user.is_authenticated else ""


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated]
    serializer_class = JournalEntrySerializer
    pagination_class = LedgerPagination
    filterset_class = JournalEntryFilter

    queryset = JournalEntry.objects.prefetch_related("lines__account").order_by(
        "-entry_date", "-created_at"
    )

    def get_serializer_class(self):
        if self.action == "create":
            return JournalEntryCreateSerializer
        return JournalEntrySerializer

    def _deny(self, message):
        return Response({"detail": message}, status=status.HTTP_403_FORBIDDEN)

    def list(self, request, *args, **kwargs):
        if not request.user.has_perm(JOURNAL_VIEW_PERMISSION):
            return self._deny("You do not have permission to view journal entries.")
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        if not request.user.has_perm(JOURNAL_VIEW_PERMISSION):
            return self._deny("You do not have permission to view journal entries.")
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        request=JournalEntryCreateSerializer,
        responses={201: JournalEntrySerializer, 400: dict, 403: dict},
    )
    def create(self, request, *args, **kwargs):
        if not request.user.has_perm(JOURNAL_ADD_PERMISSION):
            return self._deny("You do not have permission to create journal entries.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            entry = create_journal_entry(
                lines=[dict(line) for line in data["lines"]],
                entry_date=data.get("entry_date"),
                description=data.get("description", ""),
                reference=data.get("reference", ""),
                created_by=_username(request.user),
            )
        except AccountingServiceError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            JournalEntrySerializer(entry).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: JournalEntrySerializer, 400: dict})
    @action(detail=True, methods=["post"], url_path="post")
    def mark_posted(self, request, pk=None):
        if not request.user.has_perm(JOURNAL_POST_PERMISSION):
            return self._deny("You do not have permission to post journal entries.")

        entry = self.get_object()

        try:
            entry = post_journal_entry(entry, posted_by=_username(request.user))
        except AccountingServiceError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        entry = self.get_queryset().get(pk=entry.pk)
        return Response(JournalEntrySerializer(entry).data, status=status.HTTP_200_OK)
