"""
Albums API — Album Route Handlers
==================================

What:  The seven album routes: list, get, and create/update/delete in both
       the JSON-body and query-parameter flavours.
How:   Each handler parses its input, makes one AlbumService call, and
       returns the result; errors are raised and rendered by the global
       handlers in main.py.

Route Inventory:
    GET    /albums               list all albums
    GET    /albums/{id}          get one album          (400 bad id, 404 missing)
    POST   /albumsPost           create from JSON body
    PUT    /albumsPut/{id}       update from JSON body
    DELETE /albumsDelete/{id}    delete
    POST   /albumsCreate         create from query params (400 bad year)
    PUT    /albumsUpdate/{id}    update from query params (400 bad year)

Path ids are taken as raw strings and parsed here, so a bad id can be
reported per-route (400 on GET, fatal class elsewhere) instead of FastAPI's
generic 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from albums_api.schemas.album import (
    AlbumPayload,
    AlbumResponse,
    ErrorResponse,
    MessageResponse,
)
from albums_api.services.album_input import (
    fields_from_body,
    fields_from_query_params,
    parse_album_id,
)
from albums_api.services.album_service import AlbumService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Albums"])

_PLAIN_TEXT = {"content": {"text/plain": {}}}

# Query parameters are read from request.query_params (first value wins),
# so they are documented here rather than declared on the handlers.
_ALBUM_QUERY_PARAMETERS = {
    "parameters": [
        {"name": "title", "in": "query", "required": False, "schema": {"type": "string"}},
        {"name": "artist", "in": "query", "required": False, "schema": {"type": "string"}},
        {"name": "year", "in": "query", "required": True, "schema": {"type": "integer"}},
    ],
}


def get_album_service(request: Request) -> AlbumService:
    """
    FastAPI dependency returning the AlbumService bound to the shared engine.

    Tests replace it through app.dependency_overrides.
    """
    return request.app.state.album_service


@router.get(
    "/albums",
    response_model=List[AlbumResponse],
    summary="Get all albums",
    description="Get all albums from the database.",
)
async def get_albums(
    service: AlbumService = Depends(get_album_service),
) -> List[AlbumResponse]:
    return await service.list_albums()


@router.get(
    "/albums/{album_id}",
    response_model=AlbumResponse,
    responses={
        400: {"description": "Invalid album ID", **_PLAIN_TEXT},
        404: {"description": "Album not found", **_PLAIN_TEXT},
    },
    summary="Get single album by ID",
    description="Get a single album from the database by its ID.",
)
async def get_album(
    album_id: str,
    service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    parsed_id = parse_album_id(album_id)
    return await service.get_album(parsed_id)


@router.post(
    "/albumsPost",
    response_model=AlbumResponse,
    responses={500: {"description": "Malformed body or store failure", "model": ErrorResponse}},
    summary="Create a new album",
    description="Create an album from a JSON body; the response carries the assigned id.",
)
async def create_album(
    payload: AlbumPayload,
    service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    return await service.create_album(fields_from_body(payload))


@router.put(
    "/albumsPut/{album_id}",
    response_model=AlbumResponse,
    responses={500: {"description": "Malformed id/body or store failure", "model": ErrorResponse}},
    summary="Update an album",
    description=(
        "Overwrite title, artist and year from a JSON body. "
        "Updating a nonexistent id still succeeds."
    ),
)
async def update_album(
    album_id: str,
    payload: AlbumPayload,
    service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    parsed_id = parse_album_id(album_id, fatal=True)
    return await service.update_album(parsed_id, fields_from_body(payload))


@router.delete(
    "/albumsDelete/{album_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Malformed id or store failure", "model": ErrorResponse}},
    summary="Delete an album",
    description="Delete an album by id. Always reports success.",
)
async def delete_album(
    album_id: str,
    service: AlbumService = Depends(get_album_service),
) -> MessageResponse:
    parsed_id = parse_album_id(album_id, fatal=True)
    return await service.delete_album(parsed_id)


@router.post(
    "/albumsCreate",
    response_model=AlbumResponse,
    responses={400: {"description": "Invalid year", **_PLAIN_TEXT}},
    summary="Create a new album via URL",
    description="Create an album from the title, artist and year query parameters.",
    openapi_extra=_ALBUM_QUERY_PARAMETERS,
)
async def create_album_via_url(
    request: Request,
    service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    fields = fields_from_query_params(request.query_params)
    return await service.create_album(fields)


@router.put(
    "/albumsUpdate/{album_id}",
    response_model=AlbumResponse,
    responses={
        400: {"description": "Invalid year", **_PLAIN_TEXT},
        500: {"description": "Malformed id or store failure", "model": ErrorResponse},
    },
    summary="Update an album via URL",
    description="Overwrite title, artist and year from query parameters.",
    openapi_extra=_ALBUM_QUERY_PARAMETERS,
)
async def update_album_via_url(
    album_id: str,
    request: Request,
    service: AlbumService = Depends(get_album_service),
) -> AlbumResponse:
    # Year is checked before the id
    fields = fields_from_query_params(request.query_params)
    parsed_id = parse_album_id(album_id, fatal=True)
    return await service.update_album(parsed_id, fields)
