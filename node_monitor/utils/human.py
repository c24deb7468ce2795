"""Human-readable rendering of byte quantities for log lines."""

_UNITS = ["KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


def format_bytes_human_readable(bytes_value: float) -> str:
    if bytes_value < 1024:
        return f"{int(bytes_value)} bytes"

    value = float(bytes_value)
    for unit in _UNITS:
        value /= 1024
        if value < 1024:
            break

    return f"{value:.3f}{unit}"
