"""Placeholder stripping and length limits for rendered text.

Alertmanager templates frequently render missing data as Go zero values such as
``map[]`` or ``(instance )``. Every component that puts user-visible text into
a Discord message goes through this module so the placeholder handling lives in
one place.
"""

# Values that carry no information when used as a field name or value.
PLACEHOLDER_TOKENS: tuple[str, ...] = (
    "-",
    "...",
    "No details available",
    "map[]",
    "(instance )",
    "(instance)",
    "undefined",
    "null",
)

# Fragments removed from free text wherever they occur.
STRIPPED_SUBSTRINGS: tuple[str, ...] = ("map[]", "(instance )", "(instance)")

# Label values treated as absent by the label formatter.
EMPTY_LABEL_TOKENS: tuple[str, ...] = (
    "map[]",
    "(instance)",
    "(instance )",
    "undefined",
    "null",
)

ELLIPSIS = "..."


def truncate(text: str, max_len: int) -> str:
    """Cut ``text`` to at most ``max_len`` characters, marking the cut with ``...``."""
    if len(text) <= max_len:
        return text
    if max_len <= len(ELLIPSIS):
        return text[:max_len]
    return text[: max_len - len(ELLIPSIS)] + ELLIPSIS


def strip_substrings(text: str, substrings: tuple[str, ...] = STRIPPED_SUBSTRINGS) -> str:
    for fragment in substrings:
        text = text.replace(fragment, "").strip()
    return text


def clean_text(value: str) -> str:
    """Remove placeholder fragments and surrounding whitespace."""
    return strip_substrings(value.strip())


def is_empty_label_value(value: str) -> bool:
    value = value.strip()
    return not value or value in EMPTY_LABEL_TOKENS


def is_placeholder(value: str) -> bool:
    return value.strip() in PLACEHOLDER_TOKENS


def is_valid_field(name: str, value: str) -> bool:
    """Return whether ``name``/``value`` would make a meaningful embed field."""
    name = name.strip()
    value = value.strip()

    if not name or not value:
        return False
    if name in PLACEHOLDER_TOKENS or value in PLACEHOLDER_TOKENS:
        return False

    value = clean_text(value)
    return bool(value) and "undefined" not in value and "null" not in value
