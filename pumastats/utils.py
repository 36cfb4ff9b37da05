import math
import traceback
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


def ieee_divide(numerator: int | float, denominator: int | float) -> float:
    """
    Divides two numbers the way IEEE 754 floats do instead of raising ZeroDivisionError.

    Args:
        numerator (int | float): The dividend.
        denominator (int | float): The divisor.

    Returns:
        float: The quotient. When `denominator` is 0 the result is nan for a 0 numerator,
        and a signed infinity otherwise.
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / float(denominator)


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Rounds a float to `digits` decimals, resolving ties away from zero instead of to the even digit.

    Args:
        value (float): The value to round. nan and infinities are returned unchanged.
        digits (int, optional): Number of decimals to keep. Defaults to 2.

    Returns:
        float: The rounded value, e.g. 90.625 -> 90.63.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def print_line(text: str) -> None:
    print(text)


def print_debug(text: str) -> None:
    print(f"[debug] {text}")


def print_error(error: BaseException, context: Any, label: str) -> None:
    """
    Prints an error report with its traceback.

    Args:
        error (BaseException): The error to report.
        context (Any): Extra context about where the error happened. Printed when not None.
        label (str): A fixed description of the failed operation.
    """
    print(f"{label}: {error!r}")
    if context is not None:
        print(f"\tContext: {context}")
    traceback.print_exception(type(error), error, error.__traceback__)
