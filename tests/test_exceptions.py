"""Tests for custom exception hierarchy."""

from kyc_ledger.exceptions import (
    ConfigurationError,
    KycLedgerError,
    PreconditionViolation,
    SinkError,
    UnknownOperationError,
)
from kyc_ledger.models import ViolationKind


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_kyc_ledger_error_is_exception(self) -> None:
        assert isinstance(KycLedgerError("test"), Exception)

    def test_precondition_violation_is_kyc_ledger_error(self) -> None:
        assert isinstance(PreconditionViolation(ViolationKind.NOT_FOUND, "test"), KycLedgerError)

    def test_unknown_operation_is_kyc_ledger_error(self) -> None:
        assert isinstance(UnknownOperationError("test"), KycLedgerError)

    def test_configuration_error_is_kyc_ledger_error(self) -> None:
        assert isinstance(ConfigurationError("test"), KycLedgerError)

    def test_sink_error_is_kyc_ledger_error(self) -> None:
        assert isinstance(SinkError("test"), KycLedgerError)


class TestPreconditionViolation:
    """Test the kind and message carried by a violation."""

    def test_kind_and_message(self) -> None:
        err = PreconditionViolation(ViolationKind.ALREADY_EXISTS, "Customer 'alice' already exists")

        assert err.kind is ViolationKind.ALREADY_EXISTS
        assert err.message == "Customer 'alice' already exists"
        assert str(err) == "Customer 'alice' already exists"

    def test_repr(self) -> None:
        err = PreconditionViolation(ViolationKind.NOT_AUTHORIZED, "nope")

        assert repr(err) == "PreconditionViolation(NOT_AUTHORIZED, 'nope')"

    def test_kind_values(self) -> None:
        assert {kind.value for kind in ViolationKind} == {
            "ALREADY_EXISTS",
            "NOT_FOUND",
            "NOT_AUTHORIZED",
            "NOT_PERMITTED",
            "INVALID_INPUT",
        }
