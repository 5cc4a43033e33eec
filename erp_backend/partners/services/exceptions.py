# partners/services/exceptions.py


class PartnerError(Exception):
    """Base error for customer / supplier operations."""
