# Overview: Display formatting for money amounts stored as integer cents.


def format_cents(cents: int, currency: str = "KSH") -> str:
    """1234550 -> 'KSH 12345.50' (two decimals, no grouping, like the printed record)."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    return f"{currency} {sign}{whole}.{frac:02d}"


def format_cents_grouped(cents: int, currency: str = "KSH") -> str:
    """1234550 -> 'KSH 12,345.50' for on-screen totals."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    return f"{currency} {sign}{whole:,}.{frac:02d}"
