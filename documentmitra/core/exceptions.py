"""Exceptions raised by the catalog and booking-form layers."""


class CatalogError(Exception):
    """Base exception for catalog operations."""


class RecordSourceError(CatalogError):
    """The service records could not be fetched from the data backend."""


class BookingFormError(CatalogError):
    """Base error for booking form configuration."""


class InvalidFormActionError(BookingFormError):
    """A form builder action referenced an entry that does not exist."""
