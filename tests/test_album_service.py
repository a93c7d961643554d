"""
Albums API — Album Service Tests
=================================

What:  Tests for AlbumService against a scratch SQLite store, plus failure
       handling with a session factory that always errors.

What we test:
    ✅ Create assigns ids and returns the stored fields
    ✅ Get returns the stored row; missing rows raise NotFoundError
    ✅ List returns every row; an empty table yields []
    ✅ Update/delete of a missing id succeed without touching other rows
    ✅ Driver errors are wrapped in DatabaseError
"""

import pytest

from albums_api.exceptions import DatabaseError, NotFoundError
from albums_api.services.album_input import AlbumFields
from albums_api.services.album_service import DELETE_MESSAGE, AlbumService


class TestAlbumServiceCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, album_service):
        created = await album_service.create_album(AlbumFields("Blue", "Joni Mitchell", 1971))

        assert created.id > 0
        assert created.title == "Blue"
        assert created.artist == "Joni Mitchell"
        assert created.year == 1971

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, album_service):
        first = await album_service.create_album(AlbumFields("A", "X", 1990))
        second = await album_service.create_album(AlbumFields("B", "Y", 1991))
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_returns_created_album(self, album_service):
        created = await album_service.create_album(AlbumFields("Hejira", "Joni Mitchell", 1976))

        fetched = await album_service.get_album(created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, album_service):
        with pytest.raises(NotFoundError) as excinfo:
            await album_service.get_album(999)
        assert excinfo.value.message == "Album not found"


class TestAlbumServiceList:

    @pytest.mark.asyncio
    async def test_list_empty(self, album_service):
        assert await album_service.list_albums() == []

    @pytest.mark.asyncio
    async def test_list_returns_all_rows(self, album_service):
        for i in range(3):
            await album_service.create_album(AlbumFields(f"Album {i}", "Artist", 2000 + i))

        albums = await album_service.list_albums()

        assert sorted(a.title for a in albums) == ["Album 0", "Album 1", "Album 2"]


class TestAlbumServiceUpdateAndDelete:

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, album_service):
        created = await album_service.create_album(AlbumFields("Old", "Someone", 1900))

        echoed = await album_service.update_album(created.id, AlbumFields("New", "Else", 2001))
        stored = await album_service.get_album(created.id)

        assert echoed == stored
        assert stored.title == "New"
        assert stored.year == 2001

    @pytest.mark.asyncio
    async def test_update_missing_id_echoes_without_creating(self, album_service, row_count):
        echoed = await album_service.update_album(999, AlbumFields("Ghost", "Nobody", 1999))

        assert echoed.id == 999
        assert echoed.title == "Ghost"
        assert await row_count() == 0

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, album_service):
        created = await album_service.create_album(AlbumFields("Gone", "Soon", 1980))

        result = await album_service.delete_album(created.id)

        assert result.message == DELETE_MESSAGE
        with pytest.raises(NotFoundError):
            await album_service.get_album(created.id)

    @pytest.mark.asyncio
    async def test_delete_missing_id_still_succeeds(self, album_service):
        kept = await album_service.create_album(AlbumFields("Stays", "Here", 1970))

        result = await album_service.delete_album(kept.id + 100)

        assert result.message == DELETE_MESSAGE
        assert await album_service.get_album(kept.id) == kept


class TestAlbumServiceStoreFailures:
    """Every operation turns driver errors into DatabaseError."""

    def setup_method(self):
        self.fields = AlbumFields("T", "A", 2000)

    @pytest.mark.asyncio
    async def test_list_failure(self, failing_session_factory):
        service = AlbumService(failing_session_factory)
        with pytest.raises(DatabaseError) as excinfo:
            await service.list_albums()
        assert excinfo.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_get_failure(self, failing_session_factory):
        service = AlbumService(failing_session_factory)
        with pytest.raises(DatabaseError):
            await service.get_album(1)

    @pytest.mark.asyncio
    async def test_create_failure(self, failing_session_factory):
        service = AlbumService(failing_session_factory)
        with pytest.raises(DatabaseError):
            await service.create_album(self.fields)

    @pytest.mark.asyncio
    async def test_update_failure(self, failing_session_factory):
        service = AlbumService(failing_session_factory)
        with pytest.raises(DatabaseError):
            await service.update_album(1, self.fields)

    @pytest.mark.asyncio
    async def test_delete_failure(self, failing_session_factory):
        service = AlbumService(failing_session_factory)
        with pytest.raises(DatabaseError):
            await service.delete_album(1)
