# partners/api/serializers.py

from rest_framework import serializers

from partners.models import Customer, Supplier


class _PartnerSerializer(serializers.ModelSerializer):
    """
    opening_balance is write-once: it is posted to the ledger when the
    partner is created and ignored on later updates.
    """

    account_detail = serializers.SerializerMethodField()

    def get_account_detail(self, obj):
        account = obj.account
        if account is None:
            return None
        return {
            "id": account.id,
            "code": account.code,
            "name": account.name,
            "current_balance": float(account.current_balance),
        }

    def validate_opening_balance(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Opening balance cannot be negative")
        return value

    def update(self, instance, validated_data):
        validated_data.pop("opening_balance", None)
        return super().update(instance, validated_data)


class CustomerSerializer(_PartnerSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "address",
            "email",
            "cnic",
            "contact_no",
            "opening_balance",
            "date",
            "credit_limit",
            "status",
            "price_type",
            "account",
            "account_detail",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "account", "created_at", "updated_at"]


class SupplierSerializer(_PartnerSerializer):
    # Blank -> next SUP-<NNN>
    code = serializers.CharField(max_length=20, required=False, allow_blank=True)

    class Meta:
        model = Supplier
        fields = [
            "id",
            "code",
            "name",
            "company_name",
            "address",
            "city",
            "state",
            "country",
            "zip_code",
            "email",
            "phone",
            "cnic",
            "contact_person",
            "tax_id",
            "payment_terms",
            "opening_balance",
            "date",
            "status",
            "notes",
            "account",
            "account_detail",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "account", "created_at", "updated_at"]

    def validate_code(self, value):
        value = (value or "").strip()
        if not value:
            return value
        qs = Supplier.objects.filter(code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Supplier code already exists")
        return value

    def update(self, instance, validated_data):
        if not validated_data.get("code", instance.code):
            validated_data.pop("code", None)
        return super().update(instance, validated_data)
