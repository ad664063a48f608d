# invoicer/domain/exceptions.py
"""Errors raised by the domain services and translated to HTTP by the API layer."""


class InvoicerError(Exception):
    """Base class for domain errors."""

    status_code = 400


class NotFoundError(InvoicerError):
    status_code = 404


class DuplicateError(InvoicerError):
    status_code = 409


class BusinessProfileIncompleteError(InvoicerError):
    """Raised when an invoice is created before the business profile is filled in."""


class InvalidInvoiceTransitionError(InvoicerError):
    """Raised when an invoice status transition is not allowed."""


class InvoiceLockedError(InvoicerError):
    """Raised when a non-draft invoice is edited or deleted."""
