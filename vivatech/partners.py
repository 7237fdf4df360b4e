"""Partner and exhibitor records: extraction from the partners page and CSV output."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass
from os import PathLike
from typing import Any, Iterable

from .extract import ExtractionError, find_embedded_array, unescape_unicode

__all__ = [
    "PARTNERS_URL",
    "DEFAULT_PARTNERS_OUTPUT",
    "PARTNER_CSV_FIELDS",
    "Partner",
    "NoPartnerDataError",
    "extract_partners_from_html",
    "partners_from_json_array",
    "country_from_city",
    "country_from_name",
    "is_likely_country",
    "write_partners_csv",
]

log = logging.getLogger(__name__)

PARTNERS_URL = "https://vivatechnology.com/partners"
DEFAULT_PARTNERS_OUTPUT = "vivatech_partners_2025.csv"

PARTNER_CSV_FIELDS = (
    "CompanyName",
    "Category",
    "Country",
    "Description",
    "Website",
    "LogoURL",
)

# Arrays whose closing bracket lies further than this many bytes from
# their start are not considered.
_SCAN_LIMIT = 50_000_000

_CITY_COUNTRIES = (
    (("Paris",), "France"),
    (("London",), "UK"),
    (("Berlin",), "Germany"),
    (("Tokyo",), "Japan"),
    (("New York", "San Francisco"), "USA"),
    (("Beijing", "Shanghai"), "China"),
    (("Mumbai", "Bangalore"), "India"),
    (("Toronto", "Montreal"), "Canada"),
)

_NAME_COUNTRIES = (
    ("France", "France"),
    ("USA", "USA"),
    ("United States", "USA"),
    ("UK", "UK"),
    ("United Kingdom", "UK"),
    ("Germany", "Germany"),
    ("Japan", "Japan"),
    ("China", "China"),
    ("India", "India"),
    ("Canada", "Canada"),
)

_KNOWN_COUNTRIES = (
    "France", "USA", "United States", "UK", "United Kingdom", "Germany",
    "Japan", "China", "India", "Canada", "Spain", "Italy", "Netherlands",
    "Belgium", "Switzerland", "Austria", "Australia", "New Zealand",
    "Singapore", "Korea", "Brazil", "Mexico", "Argentina", "Chile", "Poland",
    "Czech Republic", "Hungary", "Romania", "Greece", "Portugal", "Ireland",
    "Scotland", "Wales", "Sweden", "Norway", "Denmark", "Finland", "Russia",
    "Ukraine", "Turkey", "Israel", "UAE", "Saudi Arabia", "Egypt",
    "South Africa", "Nigeria", "Kenya", "Morocco", "Algeria", "Tunisia",
    "Albania", "Armenia", "Bangladesh",
)

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


_KNOWN_COUNTRIES_FOLDED = frozenset(_ascii_lower(c) for c in _KNOWN_COUNTRIES)


class NoPartnerDataError(ExtractionError):
    """Raised when a page holds no usable partner data."""


@dataclass(frozen=True)
class Partner:
    """A partner or startup exhibiting at the conference."""

    name: str
    category: str = ""
    country: str = ""
    description: str = ""
    website: str = ""
    logo_url: str = ""

    def to_record(self) -> dict[str, str]:
        """Return the CSV row for this partner, keyed by column name."""
        return {
            "CompanyName": self.name,
            "Category": self.category,
            "Country": self.country,
            "Description": self.description,
            "Website": self.website,
            "LogoURL": self.logo_url,
        }


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _child(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def extract_partners_from_html(html: str) -> list[Partner]:
    """Return the partners listed in the JSON array embedded in a partners page."""
    raw = find_embedded_array(html)
    if raw is None or len(raw.encode("utf-8")) - 1 > _SCAN_LIMIT:
        raise NoPartnerDataError("No partner data found")
    try:
        data = json.loads(unescape_unicode(raw.replace('\\"', '"')))
    except (json.JSONDecodeError, RecursionError) as exc:
        raise NoPartnerDataError("No partner data found") from exc
    if not isinstance(data, list):
        raise NoPartnerDataError("No partner data found")
    return partners_from_json_array(data)


def partners_from_json_array(items: Iterable[Any]) -> list[Partner]:
    """Build partners from decoded JSON objects.

    Only objects with string ``name`` and ``type`` are used, and only those
    whose type mentions ``partner`` or is exactly ``startup``. The first
    object of each name wins.
    """
    partners: dict[str, Partner] = {}
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        kind = item.get("type")
        if not isinstance(name, str) or not isinstance(kind, str):
            continue
        if "partner" not in kind and kind != "startup":
            continue
        if name in partners:
            continue

        city = _child(item.get("key_figures"), "city")
        country = (
            country_from_city(city) if isinstance(city, str) else country_from_name(name)
        )
        description = item["desc"] if "desc" in item else item.get("short_desc")

        partners[name] = Partner(
            name=name,
            category=kind,
            country=country,
            description=_str_or_empty(description),
            website=_str_or_empty(item.get("website")),
            logo_url=_str_or_empty(_child(item.get("logo"), "u")),
        )

    log.info("Extracted %d partners from JSON array", len(partners))
    return list(partners.values())


def country_from_city(city: str) -> str:
    """Map a well-known city to its country, or return an empty string."""
    for needles, country in _CITY_COUNTRIES:
        if any(needle in city for needle in needles):
            return country
    return ""


def country_from_name(name: str) -> str:
    """Guess a country from a company name such as ``"Company - France"``."""
    head, sep, tail = name.rpartition(" - ")
    if sep:
        candidate = tail.strip()
        if is_likely_country(candidate):
            return candidate

    upper = name.upper()
    for pattern, country in _NAME_COUNTRIES:
        if pattern.upper() in upper:
            return country
    return ""


def is_likely_country(text: str) -> bool:
    """Tell whether ``text`` names a known country, ignoring ASCII case."""
    return _ascii_lower(text) in _KNOWN_COUNTRIES_FOLDED


def write_partners_csv(partners: Iterable[Partner], path: str | PathLike) -> int:
    """Write partners to a CSV file and return the number of rows written.

    The header row is written together with the first record, so an empty
    partner list leaves an empty file.
    """
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(
            handle, fieldnames=PARTNER_CSV_FIELDS, lineterminator="\n"
        )
        for partner in partners:
            if count == 0:
                writer.writeheader()
            writer.writerow(partner.to_record())
            count += 1
    log.info("Successfully wrote %d records to CSV file: %s", count, path)
    return count