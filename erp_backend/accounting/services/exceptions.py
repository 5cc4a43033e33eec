# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class UnknownAccountTypeError(AccountingServiceError, ValueError):
    """Raised when an account classification is outside the closed set."""


class UnbalancedDocumentError(AccountingServiceError, ValueError):
    """Raised when a ledger document's debits and credits differ."""


class AccountResolutionError(AccountingServiceError):
    """Raised when an expected account or chart node cannot be resolved."""


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""


class VoucherError(AccountingServiceError):
    """Raised when a voucher cannot be created, changed or removed."""


class DocumentNumberError(AccountingServiceError):
    """Raised on duplicate or malformed document numbers."""


class DocumentStateError(AccountingServiceError):
    """Raised when a document is not in a state that allows the operation."""
