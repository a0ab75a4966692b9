from netrate.data.network_throughput import ScaledRate

# Decimal prefixes, largest first
RATE_PREFIXES: list[tuple[int, str]] = [
    (1_000_000_000, "G"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def pad_float(number: float = 0.0) -> str:
    """
    Pad a float to one decimal place.
    """
    return f"{number:.1f}"


def scale_rate(number: float = 0.0) -> ScaledRate:
    """
    Scale a per-second rate to the largest decimal prefix it reaches.
    """
    for divisor, prefix in RATE_PREFIXES:
        if number >= divisor:
            return ScaledRate(raw=number, magnitude=number / divisor, prefix=prefix)

    return ScaledRate(raw=number, magnitude=number, prefix="")


def network_speed(rate: ScaledRate, bytes: bool = False) -> str:
    """
    Render a scaled rate, e.g., 40.0 Kbit/s or 5.0 Kbyte/s.
    """
    suffix = "byte/s" if bytes else "bit/s"
    return f"{pad_float(number=rate.magnitude)} {rate.prefix}{suffix}"
