"""Tests for custom exception hierarchy."""

from future_ledger.exceptions import (
    ConfigurationError,
    DataIntegrityGapError,
    EntityNotFoundError,
    FutureLedgerError,
    InvalidDateError,
    InvalidEntityStateError,
    PersistenceError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(FutureLedgerError("test"), Exception)

    def test_entity_not_found_is_base(self) -> None:
        assert isinstance(EntityNotFoundError("test"), FutureLedgerError)

    def test_integrity_gap_is_entity_not_found(self) -> None:
        err = DataIntegrityGapError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, FutureLedgerError)

    def test_leaf_errors_are_base(self) -> None:
        for cls in (InvalidDateError, InvalidEntityStateError, ConfigurationError, PersistenceError):
            assert isinstance(cls("test"), FutureLedgerError)

    def test_exception_message(self) -> None:
        err = DataIntegrityGapError("Transaction tx-1 references unknown card c-9")
        assert str(err) == "Transaction tx-1 references unknown card c-9"
