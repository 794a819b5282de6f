# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Change Description: address/hex helpers for web3 receipts and transaction params,
# accepting both raw JSON-RPC hex strings and web3.py decoded values.

from typing import Any, Optional

from eth_utils import add_0x_prefix, to_checksum_address, to_hex, to_int

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")


def hex_to_dec(value: Any) -> Optional[int]:
    """
    Converts a hex string (JSON-RPC quantity) to int. Ints pass through,
    since web3.py already decodes quantities in formatted responses.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return to_int(hexstr=value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid hex string for conversion: {value}")
        return None


def to_hex_str(value: Any) -> Optional[str]:
    """
    Renders bytes / HexBytes / hex strings as a lowercase 0x-prefixed string.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return add_0x_prefix(value.lower())
    return to_hex(value)


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to its EIP-55 checksum form.
    Returns None for None / non-string input; malformed strings are returned unchanged
    so that they fail where the address is actually used.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return to_checksum_address(address)
    except ValueError:
        return address
