"""Duration Strings — parse and format Go-style durations ("15m", "1h30m", "250ms").

Invariants:
    - parse_duration is pure: str in, timedelta out, ValueError on anything malformed
    - Accepted units: ns, us, µs (and μs), ms, s, m, h; each number needs a unit
    - "0" (bare zero) is the only unitless value accepted
    - Values beyond timedelta's range are malformed too (ValueError, never OverflowError)
    - format_duration(parse_duration(s)) is canonical (e.g. "90m" -> "1h30m0s")
"""

import math
import re
from datetime import timedelta

_UNIT_MICROSECONDS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}

# Longest units first so "ms" is not read as "m" + garbage
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Raises ValueError for empty input, unknown units, or missing units.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()

    if not math.isfinite(total):
        raise ValueError(f"invalid duration {value!r}")
    try:
        return timedelta(microseconds=sign * total)
    except OverflowError:
        raise ValueError(f"invalid duration {value!r}") from None


def format_duration(delta: timedelta) -> str:
    """Render a timedelta in the canonical h/m/s form ("15m0s", "1h0m0s", "250ms")."""
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000_000:
        if micros % 1_000 == 0:
            return f"{sign}{micros // 1_000}ms"
        return f"{sign}{micros}µs"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = rest / 1_000_000
    seconds_text = f"{seconds:.6f}".rstrip("0").rstrip(".")

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds_text}s"
    if minutes:
        return f"{sign}{minutes}m{seconds_text}s"
    return f"{sign}{seconds_text}s"
