"""
Albums API — Request Input Extraction
======================================

What:  Turns raw request input (path segments, query strings, decoded bodies)
       into the values the AlbumService works with.
How:   Two extraction strategies produce the same AlbumFields tuple:
       fields_from_body() for JSON-encoded routes and fields_from_query() for
       query-parameter routes. parse_album_id() handles the path segment.

Integer Parsing:
    Ids and years accept an optional sign followed by ASCII digits only
    ("42", "+42", "-7"), within the signed 64-bit range. Whitespace,
    underscores, decimals, empty strings and out-of-range values are rejected.

Query Parameters:
    A repeated parameter (?year=1&year=abc) is read by its FIRST value.
"""

import re
from typing import NamedTuple, Optional

from starlette.datastructures import QueryParams

from albums_api.exceptions import MalformedRequestError, ValidationError
from albums_api.schemas.album import INT64_MAX, INT64_MIN, AlbumPayload

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


class AlbumFields(NamedTuple):
    """The three mutable album attributes, ready to be written."""
    title: str
    artist: str
    year: int


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a signed 64-bit decimal integer; returns None when `raw` is not one."""
    if raw is None or not _INTEGER_RE.match(raw):
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def parse_album_id(raw: str, fatal: bool = False) -> int:
    """
    Parse the {id} path segment.

    Args:
        raw:    The path segment as received
        fatal:  False → a bad id is a client error (400, GET by id).
                True  → a bad id belongs to the fatal class (update/delete routes).

    Raises:
        ValidationError:        bad id, fatal=False
        MalformedRequestError:  bad id, fatal=True
    """
    album_id = parse_int(raw)
    if album_id is None:
        if fatal:
            raise MalformedRequestError(
                message="Invalid album ID",
                context={"album_id": raw},
            )
        raise ValidationError(message="Invalid album ID", field="id")
    return album_id


def fields_from_body(payload: AlbumPayload) -> AlbumFields:
    """Extraction strategy for JSON-encoded routes (body already decoded)."""
    return AlbumFields(title=payload.title, artist=payload.artist, year=payload.year)


def fields_from_query(
    title: Optional[str],
    artist: Optional[str],
    year: Optional[str],
) -> AlbumFields:
    """
    Extraction strategy for query-parameter routes.

    Absent title/artist become empty strings. The year is mandatory and must
    be an integer.

    Raises:
        ValidationError: year missing or not an integer (→ 400 "Invalid year")
    """
    parsed_year = parse_int(year)
    if parsed_year is None:
        raise ValidationError(message="Invalid year", field="year")
    return AlbumFields(title=title or "", artist=artist or "", year=parsed_year)


def first_query_value(params: QueryParams, name: str) -> Optional[str]:
    """First value of a query parameter, or None when it is absent."""
    values = params.getlist(name)
    return values[0] if values else None


def fields_from_query_params(params: QueryParams) -> AlbumFields:
    """fields_from_query() fed from a request's raw query parameters."""
    return fields_from_query(
        first_query_value(params, "title"),
        first_query_value(params, "artist"),
        first_query_value(params, "year"),
    )
