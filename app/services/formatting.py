"""
Display formatting for calculator results.

Engine amounts are unrounded INR values; everything here happens at the
presentation boundary.
"""

from typing import Optional

SUPPORTED_CURRENCIES = ("INR", "USD")

LAKH = 100_000
CRORE = 10_000_000

USD_UNITS = ((1e9, "B"), (1e6, "M"), (1e3, "K"))


def _check_currency(currency: str) -> str:
    code = (currency or "").upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Unsupported currency: {currency}")
    return code


def convert_amount(amount: float, currency: str, inr_per_usd: float) -> float:
    """
    Convert an INR amount into the display currency.

    Args:
        amount: Amount in INR
        currency: "INR" or "USD"
        inr_per_usd: Fixed exchange rate supplied by configuration

    Returns:
        Amount in the display currency (0 for a USD rate of 0)
    """
    code = _check_currency(currency)
    if code == "INR":
        return amount
    if inr_per_usd <= 0:
        return 0.0
    return amount / inr_per_usd


def group_indian(whole: int) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)."""
    digits = str(abs(whole))
    if len(digits) <= 3:
        grouped = digits
    else:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        grouped = ",".join(pairs + [tail])
    return f"-{grouped}" if whole < 0 else grouped


def _format_inr(amount: float, compact: bool) -> str:
    sign = "-" if round(amount) < 0 else ""
    magnitude = abs(amount)
    if compact and magnitude >= LAKH:
        lakhs = round(magnitude / LAKH, 2)
        if lakhs >= 100:
            return f"{sign}₹{magnitude / CRORE:.2f} Cr"
        return f"{sign}₹{lakhs:.2f} L"
    return f"{sign}₹{group_indian(round(magnitude))}"


def _format_usd(amount: float, compact: bool) -> str:
    sign = "-" if round(amount) < 0 else ""
    magnitude = abs(amount)
    if compact:
        for index, (threshold, suffix) in enumerate(USD_UNITS):
            if magnitude >= threshold:
                scaled = round(magnitude / threshold, 1)
                if scaled >= 1000 and index > 0:
                    # Rounds up into the next unit
                    threshold, suffix = USD_UNITS[index - 1]
                    scaled = magnitude / threshold
                return f"{sign}${scaled:.1f}{suffix}"
    return f"{sign}${round(magnitude):,}"


def format_currency(amount: float, currency: str = "INR", compact: bool = False) -> str:
    """
    Format an amount already expressed in `currency`.

    INR uses lakh/crore grouping and `L` / `Cr` abbreviations when compact;
    USD uses thousands grouping and `K` / `M` / `B`.
    """
    code = _check_currency(currency)
    if code == "INR":
        return _format_inr(amount, compact)
    return _format_usd(amount, compact)


def format_percent(value: Optional[float], digits: int = 2) -> str:
    if value is None:
        return "-"
    return f"{value:.{digits}f}%"


def cash_flow_tone(monthly_cash_flow: float) -> str:
    """CSS tone for a cash flow figure; negative cash flow is shown distinctly."""
    return "positive" if monthly_cash_flow >= 0 else "negative"
