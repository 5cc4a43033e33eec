# accounting/api/serializers/vouchers.py

from rest_framework import serializers

from accounting.models.account import Account
from accounting.models.voucher import Voucher, VoucherEntry


class VoucherEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = VoucherEntry
        fields = (
            "id",
            "account",
            "account_name",
            "description",
            "debit",
            "credit",
            "sort_order",
        )
        read_only_fields = fields


class VoucherSerializer(serializers.ModelSerializer):
    entries = VoucherEntrySerializer(many=True, read_only=True)

    class Meta:
        model = Voucher
        fields = (
            "id",
            "voucher_number",
            "type",
            "date",
            "narration",
            "cash_bank_account",
            "cheque_number",
            "cheque_date",
            "status",
            "total_debit",
            "total_credit",
            "created_by",
            "approved_by",
            "approved_at",
            "created_at",
            "entries",
        )
        read_only_fields = fields


class VoucherEntryInputSerializer(serializers.Serializer):
    account = serializers.PrimaryKeyRelatedField(
        queryset=Account.objects.all(), required=False, allow_null=True
    )
    account_name = serializers.CharField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    debit = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=0, min_value=0
    )
    credit = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=0, min_value=0
    )
    sort_order = serializers.IntegerField(required=False, min_value=0)


VOUCHER_TYPE_INPUTS = [
    *[value for value, _ in Voucher.TYPE_CHOICES],
    *Voucher.NUMERIC_TYPE_ALIASES.keys(),
]


class VoucherWriteSerializer(serializers.Serializer):
    """
    Input serializer for create (all required) and update (partial=True).
    """

    voucher_number = serializers.CharField(max_length=50)
    type = serializers.ChoiceField(choices=VOUCHER_TYPE_INPUTS)
    date = serializers.DateField()
    narration = serializers.CharField(required=False, allow_blank=True, default="")
    cash_bank_account = serializers.CharField(
        required=False, allow_blank=True, default=""
    )
    cheque_number = serializers.CharField(required=False, allow_blank=True, default="")
    cheque_date = serializers.DateField(required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(
        choices=Voucher.STATUS_CHOICES, required=False, default=Voucher.STATUS_DRAFT
    )
    entries = VoucherEntryInputSerializer(many=True)

    def validate_voucher_number(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("voucher_number is required")
        return v

    def validate_entries(self, value):
        if not value:
            raise serializers.ValidationError("At least one entry is required")
        return value
