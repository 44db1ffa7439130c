"""Field checkers.

Each checker tests one primitive constraint on one value and returns a
CheckResult. Checkers stop at the first failed condition and never raise,
whatever the input: a missing field arrives as None and simply fails the
type test.

Signature: ``checker(value, label, **params) -> CheckResult``, where
``label`` names the field in the failure message.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from podfeed_cli.reference import categories, language_codes
from podfeed_cli.validation.results import CheckResult, fail, ok

DEFAULT_LABEL = "Unknown"

MAX_DEFAULT_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 4000

CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"

ITUNES_TYPES = ("serial", "episodic")
EPISODE_TYPES = ("full", "trailer", "bonus")
AUDIO_TYPES = ("audio/x-m4a", "audio/mpeg")

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# "ddd, DD MMM YYYY HH:mm:ss ZZ" and "ddd, DD MMM YY HH:mm:ss ZZ"
_DATE_PATTERN = re.compile(
    r"^(?P<weekday>" + "|".join(_WEEKDAYS) + r"), "
    r"(?P<day>\d{2}) "
    r"(?P<month>" + "|".join(_MONTHS) + r") "
    r"(?P<year>\d{4}|\d{2}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<zone>[+-]\d{2}:?\d{2}|Z)$",
    re.ASCII,
)

# Two-digit years at or above this pivot belong to the 1900s
_TWO_DIGIT_YEAR_PIVOT = 69

_LANGUAGE_PATTERN = re.compile(r"^[a-z]{2}(|-[a-zA-Z]{2})$")

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?\d+)", re.ASCII)

_EMAIL_PATTERN = re.compile(
    r"^[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~](\.?[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~])*"
    r"@[a-zA-Z0-9](-*\.?[a-zA-Z0-9])*\.[a-zA-Z](-?[a-zA-Z0-9])+$"
)
_MAX_EMAIL_LENGTH = 254
_MAX_EMAIL_LOCAL_LENGTH = 64
_MAX_EMAIL_DOMAIN_PART_LENGTH = 63

HTTPS_SCHEME = "https://"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_text_shape(value: Any, label: str, max_length: int, length_message: str) -> CheckResult:
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    if value.startswith(" "):
        return fail(f"{label} must not start with leading space.")
    if value.endswith(" "):
        return fail(f"{label} must not end with trailing space.")
    if len(value) == 0:
        return fail(f"{label} is an empty string.")
    if len(value) > max_length:
        return fail(f"{label} {length_message}")
    return ok()


def check_default_string(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """Short text: a trimmed, non-empty string of at most 255 characters."""
    return _check_text_shape(
        value, label, MAX_DEFAULT_LENGTH, "must not have more than 255 characters."
    )


def check_description_string(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """Long text: like a default string, but up to 4000 characters.

    The failure message still names 255 characters. This matches the
    existing behavior and is kept until product review decides otherwise.
    """
    return _check_text_shape(
        value, label, MAX_DESCRIPTION_LENGTH, "must not have more than 255 characters."
    )


def check_natural(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """A number strictly greater than zero."""
    if not _is_number(value):
        return fail(f"{label} must be a number.")
    if not value > 0:
        return fail(f"{label} must be a positive number.")
    return ok()


def check_number_string(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """A string whose leading integer is zero or more (e.g. a byte length)."""
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return fail(f"{label} is not a valid number string.")
    if int(match.group(1)) < 0:
        return fail(f"{label} must be a positive number or zero.")
    return ok()


def check_cdata_string(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """Text wrapped in a single CDATA section."""
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    if len(value) == 0:
        return fail(f"{label} is an empty string.")
    if not value.startswith(CDATA_OPEN):
        return fail(f"{label} must start with '{CDATA_OPEN}' if it's CDATA.")
    if not value[len(CDATA_OPEN) :].endswith(CDATA_CLOSE):
        return fail(f"{label} must end with '{CDATA_CLOSE}' if it's CDATA.")
    if CDATA_CLOSE in value[len(CDATA_OPEN) : -len(CDATA_CLOSE)]:
        return fail(f"{label} must not include '{CDATA_CLOSE}' in it's content.")
    return ok()


def _parse_rfc822(value: str) -> datetime | None:
    match = _DATE_PATTERN.match(value)
    if match is None:
        return None

    year = int(match["year"])
    if len(match["year"]) == 2:
        year += 1900 if year >= _TWO_DIGIT_YEAR_PIVOT else 2000

    try:
        parsed = datetime(
            year,
            _MONTHS.index(match["month"]) + 1,
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
        )
    except ValueError:
        return None

    if _WEEKDAYS[parsed.weekday()] != match["weekday"]:
        return None
    return parsed


def check_date(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """An RFC 822 date such as ``Mon, 02 Jan 2023 15:04:05 +0000``.

    The match is strict: two-digit day, English day and month names, a
    four- or two-digit year, and a day name that agrees with the date.
    """
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    if len(value) == 0:
        return fail(f"{label} is an empty string.")
    if _parse_rfc822(value) is None:
        return fail(f"{label} is not properly formatted date.")
    return ok()


def check_language(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """A language code like ``en`` or ``en-US`` with a known primary code."""
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    if len(value) == 0:
        return fail(f"{label} is an empty string.")
    if not _LANGUAGE_PATTERN.match(value):
        return fail(f"{label} has not the proper format of a language code.")
    if value[:2] not in language_codes():
        return fail(f"{label} does not start with a valid language code.")
    return ok()


def check_url_format(
    value: Any,
    label: str = DEFAULT_LABEL,
    extensions: Sequence[str] = (),
) -> CheckResult:
    """An https URL, optionally ending in one of ``extensions``."""
    if not isinstance(value, str):
        return fail(f"{label} must be a string.")
    if len(value) == 0:
        return fail(f"{label} is an empty string.")
    if not value.startswith(HTTPS_SCHEME):
        return fail(f"{label} must start with '{HTTPS_SCHEME}'.")
    if extensions and not value.endswith(tuple(extensions)):
        return fail(f"{label} must end with one of the extensions {','.join(extensions)}.")
    return ok()


def check_bool(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    if not isinstance(value, bool):
        return fail(f"{label} must be a boolean.")
    return ok()


def check_email(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    """An email address in standard syntax."""
    if not _is_valid_email(value):
        return fail(f"{label} is not a valid email address.")
    return ok()


def _is_valid_email(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    if len(value) > _MAX_EMAIL_LENGTH or not _EMAIL_PATTERN.match(value):
        return False
    local, domain = value.split("@", 1)
    if len(local) > _MAX_EMAIL_LOCAL_LENGTH:
        return False
    return all(len(part) <= _MAX_EMAIL_DOMAIN_PART_LENGTH for part in domain.split("."))


def check_itunes_category(category: Any, subcategory: Any = None) -> CheckResult:
    """A known category and, when given, one of its subcategories."""
    table = categories()
    if not isinstance(category, str):
        return fail("Itunes category must be a string.")
    if category not in table:
        return fail("Itunes category is not a valid itunes category.")
    if subcategory:
        if not isinstance(subcategory, str):
            return fail("Itunes subcategory must be a string.")
        if subcategory not in table[category]:
            return fail("Itunes subcategory is not valid.")
    return ok()


def check_itunes_type(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    if value not in ITUNES_TYPES:
        return fail(f"{label} must be 'serial' or 'episodic'")
    return ok()


def check_episode_type(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    if value not in EPISODE_TYPES:
        return fail(f"{label} must be 'full', 'trailer' or 'bonus'.")
    return ok()


def check_audio_type(value: Any, label: str = DEFAULT_LABEL) -> CheckResult:
    if value not in AUDIO_TYPES:
        return fail(f"{label} must be a valid audio type.")
    return ok()
