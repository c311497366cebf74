import re

# Canonical UUID v4: version nibble fixed to 4, variant nibble in {8, 9, a, b}.
# re.ASCII keeps \d to 0-9; other Unicode digits would otherwise match.
UUID_V4_PATTERN = re.compile(
    r"^[a-f\d]{8}-[a-f\d]{4}-4[a-f\d]{3}-[89aAbB][a-f\d]{3}-[a-f\d]{12}$",
    re.ASCII,
)


def is_uuid_v4(value: object) -> bool:
    """Return True if ``value`` is a string in canonical UUID v4 form.

    ``fullmatch`` is used so a trailing newline is rejected as well.
    """
    return isinstance(value, str) and UUID_V4_PATTERN.fullmatch(value) is not None


_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def parse_page(raw: str | int | None) -> int:
    """Parse a ``page`` query value, clamping anything below 1 to 1.

    Strings are read up to the first non-digit (``"3abc"`` -> 3); values
    with no leading integer fall back to page 1.
    """
    if raw is None:
        return 1
    if isinstance(raw, int):
        page = raw
    else:
        match = _LEADING_INT.match(raw)
        if not match:
            return 1
        page = int(match.group(1))
    return page if page > 1 else 1
