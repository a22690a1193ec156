def format_rupiah(amount: float) -> str:
    """Format a number the way id-ID locale does: 1234567.5 -> '1.234.567,5'."""
    text = f"{abs(amount):,.3f}".rstrip("0").rstrip(".")
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    if amount < 0 and text != "0":
        text = "-" + text
    return text
