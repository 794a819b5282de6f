from typing import Optional


class DepositError(Exception):
    """Base class for deposit validation failures. Never retried."""

    default_message = "Deposit rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidAmountError(DepositError):
    default_message = "Invalid amount"


class InvalidReceiverError(DepositError):
    default_message = "Invalid receiver address"


class _ShortfallError(DepositError):
    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = required
        self.available = available
        super().__init__(message)

    def __str__(self):
        return f"{self.args[0]} (required={self.required}, available={self.available})"


class InsufficientBalanceError(_ShortfallError):
    default_message = "Not enough balance"


class InsufficientAllowanceError(_ShortfallError):
    default_message = "Not enough allowance"


class DepositExceedsCapacityError(_ShortfallError):
    default_message = "Amount exceeds max deposit"


class RemoteCallError(Exception):
    """A ledger or submitter call failed at the transport/node level."""
    pass


class RemoteCallTimeoutError(RemoteCallError):
    pass
