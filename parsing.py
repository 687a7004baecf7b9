"""
Small tolerant parsers for the loosely formatted fields an AI extraction
returns: ISO 8601 durations, free-text yields and ingredient lines.

None of these functions raise; unusable input maps to an empty result.
"""

import math
import re

_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

# Section labels in an ingredient list, e.g. "For the sauce:" or "Marinade:"
_HEADER_LEAD_IN_RE = re.compile(
    r"^(?:for the\b.*?:|sauce:|marinade:|dressing:)", re.IGNORECASE)

SERVINGS_TEXT_MAX = 32


def _match_iso_duration(duration) -> re.Match | None:
    if not duration or not isinstance(duration, str):
        return None
    return _ISO_DURATION_RE.search(duration.upper())


def parse_iso_duration(duration: str | None) -> int | None:
    """
    Parse an ISO 8601 duration (e.g. PT30M, PT1H30M) to whole minutes.

    Seconds are rounded to the nearest minute, halves rounding up. Returns
    None when the value is missing, unparseable or amounts to zero minutes.
    """
    match = _match_iso_duration(duration)
    if not match:
        return None
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    total = hours * 60 + minutes + math.floor(seconds / 60 + 0.5)
    # Zero is reported as "no timing information"
    return total or None


def format_iso_duration(duration: str | None) -> str:
    """Render an ISO 8601 duration as e.g. "2 hours 30 minutes"."""
    if not duration:
        return ""
    match = _match_iso_duration(duration)
    if not match:
        return str(duration)

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)

    parts = []
    if hours > 0:
        parts.append(f"{hours} hour{'' if hours == 1 else 's'}")
    if minutes > 0:
        parts.append(f"{minutes} minute{'' if minutes == 1 else 's'}")
    return " ".join(parts) or duration


def parse_servings(recipe_yield: str | None) -> tuple[int | None, str]:
    """
    Split a free-text yield into (servings, servings_text).

    servings is the first run of digits anywhere in the text; servings_text
    is the text itself cut to 32 characters.
    """
    if recipe_yield is None:
        return None, ""
    text = str(recipe_yield)
    match = re.search(r"\d+", text)
    servings = int(match.group()) if match else None
    return servings, text[:SERVINGS_TEXT_MAX]


def is_ingredient_header(line) -> bool:
    """Best-effort check whether an ingredient line is a section label."""
    if not isinstance(line, str):
        return False
    text = line.strip()
    if not text:
        return False
    return bool(_HEADER_LEAD_IN_RE.match(text)) or text.endswith(":")
