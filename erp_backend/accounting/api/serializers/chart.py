# accounting/api/serializers/chart.py

from rest_framework import serializers

from accounting.balance_rules import ACCOUNT_CLASS_CHOICES
from accounting.models.account import Account
from accounting.models.chart import MainGroup, Subgroup


class MainGroupSerializer(serializers.ModelSerializer):
    type = serializers.ChoiceField(choices=ACCOUNT_CLASS_CHOICES)
    is_fixed = serializers.BooleanField(read_only=True)

    class Meta:
        model = MainGroup
        fields = (
            "id",
            "code",
            "name",
            "type",
            "display_order",
            "is_fixed",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "is_fixed", "created_at", "updated_at")

    def to_internal_value(self, data):
        # The chart screens send "Asset", "Revenue"...
        if hasattr(data, "get") and isinstance(data.get("type"), str):
            data = data.copy()
            data["type"] = data["type"].strip().lower()
        return super().to_internal_value(data)


class SubgroupSerializer(serializers.ModelSerializer):
    main_group_detail = MainGroupSerializer(source="main_group", read_only=True)
    is_fixed = serializers.BooleanField(read_only=True)

    class Meta:
        model = Subgroup
        fields = (
            "id",
            "main_group",
            "main_group_detail",
            "code",
            "name",
            "is_active",
            "can_delete",
            "is_fixed",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "is_fixed", "created_at", "updated_at")

    def validate_code(self, value):
        value = (value or "").strip()
        exclude_pk = self.instance.pk if self.instance else None
        clash = Subgroup.overlapping_code(value, exclude_pk=exclude_pk)
        if clash:
            raise serializers.ValidationError(
                f'Subgroup code "{value}" overlaps existing code "{clash}"'
            )
        return value


class AccountSerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth). current_balance is a ledger projection and
    never writable.
    """

    subgroup_code = serializers.CharField(source="subgroup.code", read_only=True)
    subgroup_name = serializers.CharField(source="subgroup.name", read_only=True)
    main_group = serializers.IntegerField(source="subgroup.main_group_id", read_only=True)
    account_class = serializers.CharField(read_only=True)

    class Meta:
        model = Account
        fields = (
            "id",
            "subgroup",
            "subgroup_code",
            "subgroup_name",
            "main_group",
            "account_class",
            "code",
            "name",
            "description",
            "opening_balance",
            "current_balance",
            "status",
            "can_delete",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "current_balance",
            "can_delete",
            "created_at",
            "updated_at",
        )


class AccountCreateSerializer(serializers.Serializer):
    """
    Input serializer. code is optional: when blank the next sequential code
    of the subgroup is allocated.
    """

    subgroup = serializers.PrimaryKeyRelatedField(queryset=Subgroup.objects.all())
    code = serializers.CharField(required=False, allow_blank=True, max_length=20)
    name = serializers.CharField(max_length=150)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    opening_balance = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=0
    )
    status = serializers.ChoiceField(
        choices=Account.STATUS_CHOICES, required=False, default=Account.STATUS_ACTIVE
    )

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name is required")
        return v

    def validate(self, attrs):
        code = (attrs.get("code") or "").strip()
        attrs["code"] = code
        prefix = attrs["subgroup"].code
        if code and not code.startswith(prefix):
            raise serializers.ValidationError(
                {
                    "code": f'Account code must start with subgroup code "{prefix}". '
                    f'Provided code "{code}" does not match.'
                }
            )
        return attrs


class AccountUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ("name", "description", "status")
