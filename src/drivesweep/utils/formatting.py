"""Human-readable byte sizes."""

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int) -> str:
    """Format a byte count using 1024-based units, rounded to two decimals.

    Example:
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(0)
        '0 Bytes'
    """
    if num_bytes <= 0:
        return "0 Bytes"

    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    return f"{round(value, 2):g} {SIZE_UNITS[unit]}"
