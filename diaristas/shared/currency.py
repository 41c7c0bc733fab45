"""
Currency helpers.

Monetary values are integers in cents everywhere in the system. These helpers
only convert at the edges: rendering messages/exports and reading amounts typed
by people or recognized from receipt images.
"""

import re
from typing import Optional

# Checked in order; the first pattern that matches wins
AMOUNT_PATTERNS = [
    re.compile(r"R\$\s*(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})", re.IGNORECASE),
    re.compile(r"(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})\s*(?:reais)", re.IGNORECASE),
    re.compile(r"valor:\s*(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})", re.IGNORECASE),
    re.compile(r"total:\s*(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})", re.IGNORECASE),
]


def format_brl(cents: int) -> str:
    """Format cents as Brazilian reais, e.g. 123456 -> 'R$ 1.234,56'"""
    sign = "-" if cents < 0 else ""
    reais, centavos = divmod(abs(cents), 100)
    grouped = f"{reais:,}".replace(",", ".")
    return f"{sign}R$ {grouped},{centavos:02d}"


def parse_brl(value: str) -> int:
    """
    Parse an amount written in Brazilian format into cents.

    Accepts "R$ 1.234,56", "1234,56", "150" and also "150.00".

    Raises:
        ValueError: If no amount can be read
    """
    cleaned = re.sub(r"[^\d,.-]", "", value or "")
    if not cleaned or not re.search(r"\d", cleaned):
        raise ValueError(f"Invalid amount: {value!r}")

    if "," in cleaned:
        # Dots are thousand separators, the comma is the decimal mark
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif re.search(r"\.\d{3}$", cleaned) or cleaned.count(".") > 1:
        cleaned = cleaned.replace(".", "")

    try:
        whole, _, fraction = cleaned.partition(".")
        negative = whole.startswith("-")
        whole = whole.lstrip("-") or "0"
        fraction = (fraction + "00")[:2]
        cents = int(whole) * 100 + int(fraction)
    except ValueError as e:
        raise ValueError(f"Invalid amount: {value!r}") from e

    return -cents if negative else cents


def extract_amount_from_text(text: str) -> Optional[int]:
    """
    Find a monetary value in free text (typically OCR output of a receipt).

    Returns:
        The amount in cents, or None when no pattern matches
    """
    if not text:
        return None

    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if match:
            return parse_brl(match.group(1))

    return None
