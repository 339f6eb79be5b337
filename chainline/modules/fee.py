"""GAS fee rounding for invocation transactions."""

import logging
import math

from ..constants import FIXED8_FACTOR
from ..types.common import Amount, Fixed8
from ..utils.encoding import to_fixed8
from ..utils.validation import validate_amount

__all__ = ["fixed8_gas_ceil", "gas_cost_ceil", "legacy_gas_cost_ceil"]

logger = logging.getLogger(__name__)


def fixed8_gas_ceil(value: int) -> Fixed8:
    """
    Round a Fixed8 amount up to the next whole GAS.

    Args:
        value: Amount in Fixed8 units

    Returns:
        Smallest multiple of 10^8 not below value
    """
    return Fixed8(-(-value // FIXED8_FACTOR) * FIXED8_FACTOR)


def gas_cost_ceil(gas: Amount) -> int:
    """
    Round a GAS cost up to whole GAS.

    The amount is converted to Fixed8 first, so 0.30000001 rounds to 1
    and 1.0 stays 1 without float error.

    Args:
        gas: GAS cost in whole units

    Returns:
        Whole GAS to attach to the transaction

    Raises:
        ValidationError: If gas is negative or not numeric
    """
    return fixed8_gas_ceil(to_fixed8(validate_amount(gas))) // FIXED8_FACTOR


def legacy_gas_cost_ceil(gas: float) -> int:
    """
    Round a GAS cost the way early wallet releases did.

    Multiplies as a float and rounds half up, so values within float
    error of an integer can round differently from gas_cost_ceil.
    Only use this to reproduce fees of transactions built by those
    releases.
    """
    fixed8 = math.floor(gas * FIXED8_FACTOR + 0.5)
    result = fixed8_gas_ceil(fixed8) // FIXED8_FACTOR
    if result != gas_cost_ceil(gas):
        logger.debug(f"Legacy fee rounding differs for {gas!r}: {result}")
    return result
