from typing import Any

from constants.constants import ZERO_ADDRESS
from utils.exceptions import InvalidAmountError, InvalidReceiverError


def validate_deposit_amount(amount: Any) -> None:
    """
    Validate a deposit amount expressed in the asset's smallest unit.

    Args:
        amount: Must be an int strictly greater than zero. bool, float, Decimal
            and str are rejected even when they hold an integral value.

    Raises:
        InvalidAmountError: If the amount is not a positive integer.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"Invalid amount: expected a positive integer, got {type(amount).__name__}")

    if amount <= 0:
        raise InvalidAmountError(f"Invalid amount: must be greater than 0, got {amount}")


def is_zero_address(address: Any) -> bool:
    if not address or not isinstance(address, str):
        return True
    return address.lower() == ZERO_ADDRESS


def validate_deposit_addresses(depositor: Any, vault: Any) -> None:
    """
    Validate that neither the depositor nor the vault is the zero address.
    Both failures raise the same error; the message does not say which one.

    Raises:
        InvalidReceiverError: If either address is empty or the zero address.
    """
    if is_zero_address(depositor) or is_zero_address(vault):
        raise InvalidReceiverError()
