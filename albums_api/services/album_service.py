"""
Albums API — Album Service (Store Access)
==========================================

What:  The only component that talks to the album store.
How:   Each method opens a session from the shared factory, issues ONE
       parameterized statement, commits, and maps the result to a schema.
       SQLAlchemy errors are wrapped in DatabaseError.
Who:   Built once by create_app() and injected into route handlers.

Statement Inventory:
    list_albums   SELECT id, title, artist, year FROM album
    get_album     SELECT ... FROM album WHERE id = :id
    create_album  INSERT INTO album (title, artist, year) VALUES (...)
    update_album  UPDATE album SET title, artist, year WHERE id = :id
    delete_album  DELETE FROM album WHERE id = :id

Update and delete never check that the row exists: zero affected rows is
still a success.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from albums_api.exceptions import DatabaseError, NotFoundError
from albums_api.models.album import Album
from albums_api.schemas.album import AlbumResponse, MessageResponse
from albums_api.services.album_input import AlbumFields

logger = logging.getLogger(__name__)

DELETE_MESSAGE = "Album deleted successfully"


class AlbumService:
    """
    CRUD operations over the `album` table.

    Holds no state besides the session factory of the shared engine.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_albums(self) -> List[AlbumResponse]:
        """
        Return every stored album in store-default order.

        An empty table yields an empty list.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Album))
                albums = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing albums: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve albums.",
                context={"error_type": type(e).__name__},
            ) from e

        return [AlbumResponse.model_validate(album) for album in albums]

    async def get_album(self, album_id: int) -> AlbumResponse:
        """
        Retrieve a single album by id.

        Raises:
            NotFoundError:  no row with this id (→ 404)
            DatabaseError:  query execution failed (→ 500)
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Album).where(Album.id == album_id)
                )
                album = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching album %d: %s", album_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the album.",
                context={"album_id": album_id, "error_type": type(e).__name__},
            ) from e

        if album is None:
            raise NotFoundError(resource_id=album_id)

        return AlbumResponse.model_validate(album)

    async def create_album(self, fields: AlbumFields) -> AlbumResponse:
        """
        Insert a new album and return it with the store-assigned id.

        The id is read back by flushing the INSERT before the commit.
        """
        try:
            async with self._session_factory() as session:
                album = Album(title=fields.title, artist=fields.artist, year=fields.year)
                session.add(album)
                await session.flush()
                album_id = album.id
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating album: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the album.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Album %d created", album_id)
        return AlbumResponse(id=album_id, **fields._asdict())

    async def update_album(self, album_id: int, fields: AlbumFields) -> AlbumResponse:
        """
        Overwrite title, artist and year of the album with this id.

        Returns the submitted values echoed back with `album_id`; the store is
        not re-read, and a missing row is not an error.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    update(Album)
                    .where(Album.id == album_id)
                    .values(title=fields.title, artist=fields.artist, year=fields.year)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating album %d: %s", album_id, str(e))
            raise DatabaseError(
                message="Could not update the album.",
                context={"album_id": album_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Album %d updated (%d rows affected)", album_id, result.rowcount)
        return AlbumResponse(id=album_id, **fields._asdict())

    async def delete_album(self, album_id: int) -> MessageResponse:
        """Delete the album with this id. Succeeds whether or not it existed."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(Album).where(Album.id == album_id)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting album %d: %s", album_id, str(e))
            raise DatabaseError(
                message="Could not delete the album.",
                context={"album_id": album_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Album %d deleted (%d rows affected)", album_id, result.rowcount)
        return MessageResponse(message=DELETE_MESSAGE)
