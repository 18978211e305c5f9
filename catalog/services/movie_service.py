"""Movie catalog use cases: listing with repair, lookup, create, update, delete."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.exc import OperationalError

from catalog.db.models import Movie
from catalog.db.session import StorageNotConfiguredError
from catalog.domain.movies import MISSING_LABEL_DEFAULTS, ListingFilters, MovieForm
from catalog.repositories.sql_repository import MovieRepository, StaleMovieError

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base exception for catalog workflow."""


class MovieNotFoundError(CatalogError):
    """Raised when the id is missing or matches no row."""


class MovieValidationError(CatalogError):
    """Raised when submitted fields fail validation; carries the untouched form."""

    def __init__(self, form: MovieForm):
        super().__init__("Movie form is invalid")
        self.form = form
        self.errors = dict(form.errors)


class ConcurrencyConflictError(CatalogError):
    """Raised when a replace lost a race and the row still exists."""


class CatalogConfigurationError(CatalogError):
    """Raised when the movie table cannot be reached."""


@dataclass
class MovieListing:
    movies: List[Movie] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    filters: ListingFilters = field(default_factory=ListingFilters)


class MovieService:
    """Coordinates MovieRepository calls for the movie pages."""

    def __init__(self, repository: Optional[MovieRepository] = None) -> None:
        self.repository = repository or MovieRepository()

    # -------------------------- listing --------------------------
    def _ensure_storage(self) -> None:
        try:
            ready = self.repository.has_table()
        except (StorageNotConfiguredError, OperationalError) as exc:
            raise CatalogConfigurationError(f"Movie storage is unavailable: {exc}") from exc
        if not ready:
            raise CatalogConfigurationError("Movie storage is unavailable: the movies table does not exist.")

    def repair_missing_labels(self, *, defensive: bool = False) -> int:
        """
        Replace null genre/rating with their placeholders.

        The eager form is a single bulk UPDATE per column. The defensive form
        loads whatever rows still hold a null and saves them one by one; it
        catches rows another request wrote after the bulk statement ran.
        Both are idempotent. Returns a non-zero count when anything changed.
        """
        if defensive:
            repaired = self.repository.patch_unlabeled_movies(MISSING_LABEL_DEFAULTS)
        else:
            repaired = self.repository.fill_missing_labels(MISSING_LABEL_DEFAULTS)
        if repaired:
            logger.info("Repaired %d movie rows with missing labels (defensive=%s)", repaired, defensive)
        return repaired

    def _listing_statements(self, filters: ListingFilters):
        genre_stmt = self.repository.genre_statement()
        movie_stmt = self.repository.movie_statement(
            search=filters.search,
            genre=filters.genre,
            release_year=filters.release_year,
        )
        return genre_stmt, movie_stmt

    def list_movies(self, filters: Optional[ListingFilters] = None) -> MovieListing:
        filters = filters or ListingFilters()
        self._ensure_storage()
        self.repair_missing_labels()

        genre_stmt, movie_stmt = self._listing_statements(filters)
        if self.repair_missing_labels(defensive=True):
            # Rows changed under us; build both statements again.
            genre_stmt, movie_stmt = self._listing_statements(filters)

        genres = [genre for genre in self.repository.fetch_scalars(genre_stmt) if genre is not None]
        movies = self.repository.fetch_scalars(movie_stmt)
        logger.debug("Listing returned %d movies for %s", len(movies), filters)
        return MovieListing(movies=movies, genres=genres, filters=filters)

    # -------------------------- single record --------------------------
    def get_movie(self, movie_id: Optional[int]) -> Movie:
        if movie_id is None:
            raise MovieNotFoundError("No movie id supplied")
        movie = self.repository.get_movie(movie_id)
        if movie is None:
            logger.warning("Requested non-existent movie id %s", movie_id)
            raise MovieNotFoundError(f"Movie {movie_id} not found")
        return movie

    def confirm_delete(self, movie_id: Optional[int]) -> Movie:
        return self.get_movie(movie_id)

    def create_movie(self, form: MovieForm) -> Movie:
        values = form.validate()
        if not form.is_valid:
            raise MovieValidationError(form)
        movie = self.repository.create_movie(values)
        logger.info("Created movie id %s: %s", movie.id, movie.title)
        return movie

    def update_movie(self, movie_id: int, form: MovieForm, *, form_id: Optional[int]) -> Movie:
        if form_id is None or movie_id != form_id:
            logger.warning("Rejected update: path id %s does not match form id %s", movie_id, form_id)
            raise MovieNotFoundError(f"Movie {movie_id} not found")
        values = form.validate()
        if not form.is_valid:
            raise MovieValidationError(form)
        try:
            movie = self.repository.replace_movie(movie_id, values)
        except StaleMovieError as exc:
            if not self.repository.movie_exists(movie_id):
                logger.warning("Movie id %s vanished during update", movie_id)
                raise MovieNotFoundError(f"Movie {movie_id} not found") from exc
            raise ConcurrencyConflictError(str(exc)) from exc
        logger.info("Updated movie id %s: %s", movie_id, movie.title)
        return movie

    def delete_movie(self, movie_id: int) -> None:
        if self.repository.delete_movie(movie_id):
            logger.info("Deleted movie id %s", movie_id)
        else:
            logger.info("Delete of movie id %s skipped: already gone", movie_id)
