# finance/api/serializers.py

from rest_framework import serializers

from finance.models import Account, Invoice, Payment


class PaymentSerializer(serializers.ModelSerializer):
    invoice_number = serializers.CharField(source="invoice.invoice_number", read_only=True)
    processed_by_email = serializers.EmailField(source="processed_by.email", read_only=True, default=None)

    class Meta:
        model = Payment
        fields = [
            "id",
            "payment_number",
            "invoice",
            "invoice_number",
            "amount",
            "payment_method",
            "payment_reference",
            "status",
            "payment_date",
            "processed_by",
            "processed_by_email",
            "created_at",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    sales_order_number = serializers.CharField(source="sales_order.order_number", read_only=True, default=None)
    balance_due = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "invoice_number",
            "customer",
            "customer_name",
            "sales_order",
            "sales_order_number",
            "invoice_date",
            "due_date",
            "subtotal",
            "tax_amount",
            "total_amount",
            "paid_amount",
            "balance_due",
            "status",
            "payment_date",
            "notes",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class InvoiceDetailSerializer(InvoiceSerializer):
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta(InvoiceSerializer.Meta):
        fields = [*InvoiceSerializer.Meta.fields, "payments"]
        read_only_fields = fields


class InvoiceCreateSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField(required=False)
    sales_order_id = serializers.UUIDField(required=False, allow_null=True)
    subtotal = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    tax_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    invoice_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if not attrs.get("customer_id") and not attrs.get("sales_order_id"):
            raise serializers.ValidationError({"customer_id": "customer_id or sales_order_id is required"})
        if not attrs.get("sales_order_id") and attrs.get("subtotal") is None:
            raise serializers.ValidationError({"subtotal": "subtotal is required without a sales order"})
        return attrs


class InvoiceUpdateSerializer(serializers.Serializer):
    invoice_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    subtotal = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    tax_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class RecordPaymentSerializer(serializers.Serializer):
    payment_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices)
    payment_reference = serializers.CharField(required=False, allow_blank=True, default="", max_length=120)

    def validate_payment_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("payment_amount must be greater than zero")
        return value


class DateRangeSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "end_date cannot precede start_date"})
        return attrs


class AccountSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["id", "account_code", "account_name", "balance"]
        read_only_fields = fields


class AccountSerializer(serializers.ModelSerializer):
    parent_account_code = serializers.CharField(source="parent_account.account_code", read_only=True, default=None)
    sub_accounts = AccountSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Account
        fields = [
            "id",
            "account_code",
            "account_name",
            "account_type",
            "parent_account",
            "parent_account_code",
            "sub_accounts",
            "balance",
            "description",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "sub_accounts", "created_at", "updated_at")

    def validate_account_code(self, value):
        return value.strip().upper()

    def validate(self, attrs):
        instance = self.instance
        account_type = attrs.get("account_type", getattr(instance, "account_type", None))
        parent = attrs.get("parent_account", getattr(instance, "parent_account", None))

        if parent is not None:
            ancestor = parent
            while instance is not None and ancestor is not None:
                if ancestor.pk == instance.pk:
                    raise serializers.ValidationError(
                        {"parent_account": "An account cannot be nested under itself"}
                    )
                ancestor = ancestor.parent_account
            if parent.account_type != account_type:
                raise serializers.ValidationError(
                    {"parent_account": "Parent account must have the same account_type"}
                )

        if (
            instance is not None
            and account_type != instance.account_type
            and instance.sub_accounts.exists()
        ):
            raise serializers.ValidationError(
                {"account_type": "Cannot change the type of an account that has sub-accounts"}
            )
        return attrs


class AsOfDateSerializer(serializers.Serializer):
    as_of_date = serializers.DateField(required=False)
