"""İçgörü metinleri için para birimi biçimlendirme."""

from __future__ import annotations

import math


def format_amount(value: float) -> str:
    """Binlik ayırıcılı, en fazla 3 ondalıklı tutar (1,234.5)."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_currency(value: float, symbol: str = "₹") -> str:
    return f"{symbol}{format_amount(value)}"


def format_whole_currency(value: float, symbol: str = "₹") -> str:
    """Aşağı yuvarlanmış tam sayı tutar, ayırıcısız (₹1234)."""
    return f"{symbol}{math.floor(value)}"
