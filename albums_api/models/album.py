"""
Albums API — Album SQLAlchemy Model
====================================

What:  ORM model representing the `album` table.
How:   Inherits from the shared DeclarativeBase; the AlbumService builds its
       SELECT/INSERT/UPDATE/DELETE statements from it.
Who:   Used by AlbumService and by create_tables() for bootstrap.

Table Layout:
    id      INTEGER  primary key, assigned by the store (auto-increment)
    title   TEXT
    artist  TEXT
    year    INTEGER
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from albums_api.database import Base


class Album(Base):
    """
    A single album record.

    Lifecycle:
        1. Inserted by create; the store assigns `id`
        2. Read by id or as the whole table
        3. title/artist/year overwritten in place by update (id never changes)
        4. Removed by delete
    """

    __tablename__ = "album"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    artist: Mapped[str] = mapped_column(Text, nullable=False, default="")
    year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Album(id={self.id}, title='{self.title}', artist='{self.artist}', year={self.year})>"
