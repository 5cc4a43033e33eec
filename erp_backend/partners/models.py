# partners/models.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from accounting.models.account import Account

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"

STATUS_CHOICES = [
    (STATUS_ACTIVE, "Active"),
    (STATUS_INACTIVE, "Inactive"),
]


class Customer(models.Model):
    """
    Customer master. `account` is the customer's receivable ledger account,
    created by partners.services.account_setup.
    """

    name = models.CharField(max_length=200)
    address = models.TextField(blank=True, default="")
    email = models.EmailField(blank=True, default="")
    cnic = models.CharField(max_length=30, blank=True, default="")
    contact_no = models.CharField(max_length=50, blank=True, default="")

    opening_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    date = models.DateField(null=True, blank=True)
    credit_limit = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE
    )
    price_type = models.CharField(max_length=50, blank=True, default="")

    account = models.OneToOneField(
        Account,
        on_delete=models.SET_NULL,
        related_name="customer",
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="customer_name_idx"),
            models.Index(fields=["status"], name="customer_status_idx"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Customer name is required"})
        if self.opening_balance is not None and self.opening_balance < 0:
            raise ValidationError({"opening_balance": "Opening balance cannot be negative"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class Supplier(models.Model):
    """
    Supplier master. `code` is SUP-<NNN> unless given explicitly;
    `account` is the supplier's payable ledger account.
    """

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200, blank=True, default="")
    company_name = models.CharField(max_length=200)

    address = models.TextField(blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    state = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")

    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    cnic = models.CharField(max_length=30, blank=True, default="")
    contact_person = models.CharField(max_length=150, blank=True, default="")
    tax_id = models.CharField(max_length=50, blank=True, default="")
    payment_terms = models.CharField(max_length=100, blank=True, default="")

    opening_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    date = models.DateField(null=True, blank=True)

    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE
    )
    notes = models.TextField(blank=True, default="")

    account = models.OneToOneField(
        Account,
        on_delete=models.SET_NULL,
        related_name="supplier",
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["company_name"], name="supplier_company_idx"),
            models.Index(fields=["status"], name="supplier_status_idx"),
        ]

    def __str__(self):
        return f"{self.code} – {self.company_name}"

    @property
    def display_name(self) -> str:
        return self.name or self.company_name

    def clean(self):
        self.code = (self.code or "").strip()
        self.company_name = (self.company_name or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError({"code": "Supplier code is required"})
        if not self.company_name:
            raise ValidationError({"company_name": "Company Name is required"})
        if self.opening_balance is not None and self.opening_balance < 0:
            raise ValidationError({"opening_balance": "Opening balance cannot be negative"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
