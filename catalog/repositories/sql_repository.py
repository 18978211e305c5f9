"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import delete, extract, func, inspect, or_, select, update
from sqlalchemy.sql import Select

from catalog.db.models import Movie
from catalog.db.session import get_engine, get_session
from catalog.domain.movies import fill_missing_labels


class StaleMovieError(Exception):
    """Raised when a replace affected no rows (row changed or vanished)."""


class MovieRepository:
    """CRUD and query helpers wrapping the SQLAlchemy session."""

    # -------------------------- schema --------------------------
    def has_table(self) -> bool:
        return inspect(get_engine()).has_table(Movie.__tablename__)

    # -------------------------- repair --------------------------
    def fill_missing_labels(self, defaults: Mapping[str, str]) -> int:
        """Bulk UPDATE each null column to its placeholder. Returns values changed."""
        touched = 0
        with get_session() as session:
            for column, placeholder in defaults.items():
                attr = getattr(Movie, column)
                stmt = update(Movie).where(attr.is_(None)).values({column: placeholder})
                touched += session.execute(stmt).rowcount or 0
            session.commit()
        return touched

    def patch_unlabeled_movies(self, defaults: Mapping[str, str]) -> int:
        """Load rows still holding nulls, patch them in memory and save."""
        conditions = [getattr(Movie, column).is_(None) for column in defaults]
        with get_session() as session:
            movies = session.execute(select(Movie).where(or_(*conditions))).scalars().all()
            patched = [movie for movie in movies if fill_missing_labels(movie)]
            if patched:
                session.commit()
            return len(patched)

    # -------------------------- queries --------------------------
    def genre_statement(self) -> Select:
        return select(Movie.genre).where(Movie.genre.is_not(None)).distinct().order_by(Movie.genre)

    def movie_statement(
        self,
        *,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        release_year: Optional[int] = None,
    ) -> Select:
        stmt = select(Movie)
        if search:
            stmt = stmt.where(func.upper(Movie.title).contains(search.upper(), autoescape=True))
        if genre:
            stmt = stmt.where(Movie.genre == genre)
        if release_year is not None:
            stmt = stmt.where(extract("year", Movie.release_date) >= release_year)
        return stmt

    def fetch_scalars(self, stmt: Select) -> list[Any]:
        with get_session() as session:
            return list(session.execute(stmt).scalars().all())

    def list_movies(self) -> list[Movie]:
        return self.fetch_scalars(select(Movie))

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        with get_session() as session:
            return session.get(Movie, movie_id)

    def movie_exists(self, movie_id: int) -> bool:
        with get_session() as session:
            stmt = select(Movie.id).where(Movie.id == movie_id).limit(1)
            return session.execute(stmt).first() is not None

    # -------------------------- mutations --------------------------
    def create_movie(self, values: Mapping[str, Any]) -> Movie:
        entity = Movie(**values)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def replace_movie(self, movie_id: int, values: Mapping[str, Any]) -> Movie:
        """Overwrite every column but id. Raises StaleMovieError if no row matched."""
        with get_session() as session:
            stmt = update(Movie).where(Movie.id == movie_id).values(**values)
            result = session.execute(stmt)
            if result.rowcount != 1:
                session.rollback()
                raise StaleMovieError(f"Movie {movie_id} was modified or deleted concurrently")
            session.commit()
            return session.get(Movie, movie_id)

    def delete_movie(self, movie_id: int) -> bool:
        with get_session() as session:
            result = session.execute(delete(Movie).where(Movie.id == movie_id))
            session.commit()
            return bool(result.rowcount)
