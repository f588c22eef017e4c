from __future__ import annotations

_UNITS: tuple[str, ...] = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Human readable size with 1024-based units, e.g. 1536 -> '1.5 KB'."""
    if num_bytes <= 0:
        return "0 Bytes"

    digits = max(decimals, 0)
    index = min((int(num_bytes).bit_length() - 1) // 10, len(_UNITS) - 1)
    text = f"{num_bytes / (1024**index):.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[index]}"
