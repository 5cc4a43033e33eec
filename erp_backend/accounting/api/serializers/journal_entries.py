# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models.account import Account
from accounting.models.journal import JournalEntry, JournalLine


class JournalLineSerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)

    class Meta:
        model = JournalLine
        fields = (
            "id",
            "account",
            "account_code",
            "account_name",
            "description",
            "debit",
            "credit",
            "line_order",
        )
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    lines = JournalLineSerializer(many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "entry_no",
            "entry_date",
            "reference",
            "description",
            "status",
            "total_debit",
            "total_credit",
            "created_by",
            "posted_by",
            "posted_at",
            "created_at",
            "lines",
        )
        read_only_fields = fields


class JournalLineInputSerializer(serializers.Serializer):
    account = serializers.PrimaryKeyRelatedField(queryset=Account.objects.all())
    description = serializers.CharField(required=False, allow_blank=True, default="")
    debit = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=0
    )
    credit = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=0
    )


class JournalEntryCreateSerializer(serializers.Serializer):
    """
    Input serializer (Swagger-visible).

    Balance and one-sided-line rules are enforced by the journal entry
    service so every caller gets the same checks.
    """

    entry_date = serializers.DateField(required=False)
    reference = serializers.CharField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    lines = JournalLineInputSerializer(many=True)

    def validate_lines(self, value):
        if not value:
            raise serializers.ValidationError("At least one line is required")
        return value
