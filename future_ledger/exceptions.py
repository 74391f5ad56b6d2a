"""Custom exception hierarchy for future-ledger."""


class FutureLedgerError(Exception):
    """Base exception for all future-ledger errors."""


class EntityNotFoundError(FutureLedgerError):
    """Raised when a referenced entity does not exist."""


class DataIntegrityGapError(EntityNotFoundError):
    """Raised when a card-tagged transaction points at an unknown card."""


class InvalidDateError(FutureLedgerError):
    """Raised when a stored date cannot be interpreted as a calendar day."""


class InvalidEntityStateError(FutureLedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(FutureLedgerError):
    """Raised when configuration is invalid or missing."""


class PersistenceError(FutureLedgerError):
    """Raised when the settings store fails to load or save."""
