"""Speaker records: parsing the embedded speaker list and writing it as CSV."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Iterable

from .extract import ExtractionError, extract_embedded_json

__all__ = [
    "CSV_FIELDS",
    "Image",
    "Speaker",
    "SpeakerParseError",
    "parse_speakers",
    "extract_speakers_json",
    "write_speakers_csv",
]

log = logging.getLogger(__name__)

MISSING = "N/A"

CSV_FIELDS = (
    "ID",
    "FirstName",
    "LastName",
    "Email",
    "JobTitle",
    "Company",
    "Tags",
    "Themes",
    "HasBio",
    "HasSessions",
    "IsOfficial",
    "IsPartner",
    "IsTopSpeaker",
    "CommunicationManager",
    "ImageSmallURL",
    "ImageThumbnailURL",
    "ImageLargeURL",
    "ImageMainURL",
)

_BOOL_TEXT = {True: "true", False: "false"}


class SpeakerParseError(ValueError):
    """Raised when speaker JSON does not have the expected shape."""


def _as_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise SpeakerParseError(f"invalid type for `{key}`: expected a string")
    return value


def _required_str(data: dict, key: str) -> str:
    if key not in data:
        raise SpeakerParseError(f"missing field `{key}`")
    return _as_str(data[key], key)


def _optional_str(data: dict, key: str) -> str:
    return _as_str(data[key], key) if key in data else ""


def _nullable_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    return None if value is None else _as_str(value, key)


def _flag(data: dict, key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise SpeakerParseError(f"invalid type for `{key}`: expected a boolean")
    return value


def _str_list(data: dict, key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise SpeakerParseError(f"invalid type for `{key}`: expected a list")
    return [_as_str(item, key) for item in value]


def _require_object(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise SpeakerParseError(f"invalid type for {what}: expected an object")
    return data


@dataclass(frozen=True)
class Image:
    """Speaker portrait URLs in small, thumbnail, large and main sizes."""

    u: str
    s: str = ""
    t: str = ""
    l: str = ""  # noqa: E741

    @classmethod
    def from_dict(cls, data: Any) -> Image:
        data = _require_object(data, "image")
        return cls(
            u=_required_str(data, "u"),
            s=_optional_str(data, "s"),
            t=_optional_str(data, "t"),
            l=_optional_str(data, "l"),
        )


@dataclass(frozen=True)
class Speaker:
    """One speaker as published on the conference site."""

    id: str
    firstname: str
    lastname: str
    job_title: str
    company: str
    email: str = ""
    tags: list[str] = field(default_factory=list)
    themes: list[str] = field(default_factory=list)
    image: Image | None = None
    has_bio: bool = False
    has_sessions: bool = False
    is_official: bool = False
    is_partner: bool = False
    top: bool = False
    communication_manager: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Speaker:
        data = _require_object(data, "speaker")
        image_data = data.get("image")
        return cls(
            id=_required_str(data, "id"),
            firstname=_required_str(data, "firstname"),
            lastname=_required_str(data, "lastname"),
            job_title=_required_str(data, "jobTitle"),
            company=_required_str(data, "company"),
            email=_optional_str(data, "email"),
            tags=_str_list(data, "tags"),
            themes=_str_list(data, "themes"),
            image=None if image_data is None else Image.from_dict(image_data),
            has_bio=_flag(data, "hasBio"),
            has_sessions=_flag(data, "hasSessions"),
            is_official=_flag(data, "isOfficial"),
            is_partner=_flag(data, "isPartner"),
            top=_flag(data, "top"),
            communication_manager=_nullable_str(data, "communication_manager"),
        )

    def to_record(self) -> dict[str, str]:
        """Return the CSV row for this speaker, keyed by column name."""
        image = self.image
        return {
            "ID": self.id,
            "FirstName": self.firstname,
            "LastName": self.lastname,
            "Email": self.email,
            "JobTitle": self.job_title,
            "Company": self.company,
            "Tags": ", ".join(self.tags),
            "Themes": ", ".join(self.themes),
            "HasBio": _BOOL_TEXT[self.has_bio],
            "HasSessions": _BOOL_TEXT[self.has_sessions],
            "IsOfficial": _BOOL_TEXT[self.is_official],
            "IsPartner": _BOOL_TEXT[self.is_partner],
            "IsTopSpeaker": _BOOL_TEXT[self.top],
            "CommunicationManager": self.communication_manager
            if self.communication_manager is not None
            else MISSING,
            "ImageSmallURL": image.s if image else MISSING,
            "ImageThumbnailURL": image.t if image else MISSING,
            "ImageLargeURL": image.l if image else MISSING,
            "ImageMainURL": image.u if image else MISSING,
        }


def parse_speakers(json_text: str) -> list[Speaker]:
    """Parse a JSON array of speaker objects."""
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise SpeakerParseError(
            f"Failed to parse JSON data into Speaker structs: {exc}"
        ) from exc
    if not isinstance(data, list):
        raise SpeakerParseError(
            "Failed to parse JSON data into Speaker structs: expected an array"
        )
    speakers = [Speaker.from_dict(item) for item in data]
    log.info("Successfully parsed %d speakers from JSON", len(speakers))
    return speakers


def extract_speakers_json(html: str) -> str:
    """Return the speaker JSON embedded in a speakers page."""
    try:
        return extract_embedded_json(html)
    except ExtractionError as exc:
        raise ExtractionError(
            "Could not find speaker data JSON in the HTML content"
        ) from exc


def write_speakers_csv(speakers: Iterable[Speaker], path: str | PathLike) -> int:
    """Write speakers to a CSV file and return the number of rows written.

    The header row is written together with the first record, so an empty
    speaker list leaves an empty file.
    """
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS, lineterminator="\n")
        for speaker in speakers:
            if count == 0:
                writer.writeheader()
            writer.writerow(speaker.to_record())
            count += 1
    log.info("Successfully wrote %d records to CSV file: %s", count, path)
    return count