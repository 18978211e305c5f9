"""Input shaping and validation for movie records."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

PLACEHOLDER_GENRE = "Unknown"
PLACEHOLDER_RATING = "Unrated"
MISSING_LABEL_DEFAULTS = {"genre": PLACEHOLDER_GENRE, "rating": PLACEHOLDER_RATING}

TITLE_MIN, TITLE_MAX = 3, 60
GENRE_MAX = 30
RATING_MAX = 5
PRICE_MIN, PRICE_MAX = Decimal("1"), Decimal("100")

DIGITS_PATTERN = re.compile(r"[0-9]+")
MOVIE_ID_MAX = 2**63 - 1
YEAR_MIN, YEAR_MAX = 1, 9999

GENRE_PATTERN = re.compile(r"[A-Z]+[a-zA-Z\s]*")
RATING_PATTERN = re.compile(r"[A-Z]+[a-zA-Z0-9\"'\s-]*")


def parse_bounded_int(raw: Optional[str], low: int, high: int) -> Optional[int]:
    """Parse ASCII digits into an int within [low, high]; anything else is None."""
    value = (raw or "").strip()
    if not DIGITS_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if not low <= number <= high:
        return None
    return number


def parse_movie_id(raw: Optional[str]) -> Optional[int]:
    return parse_bounded_int(raw, 1, MOVIE_ID_MAX)


@dataclass(frozen=True)
class ListingFilters:
    """Filters accepted by the list page, echoed back to the template."""

    genre: Optional[str] = None
    search: Optional[str] = None
    release_year: Optional[int] = None

    @classmethod
    def from_query(cls, genre: str = "", search: str = "", release_year: str = "") -> "ListingFilters":
        year_raw = (release_year or "").strip()
        year = parse_bounded_int(year_raw, YEAR_MIN, YEAR_MAX)
        return cls(genre=(genre or "").strip() or None, search=(search or "").strip() or None, release_year=year)


@dataclass
class MovieForm:
    """
    The only fields a client may submit for a movie.

    Values stay as the raw strings typed by the user so a rejected form can
    be shown again exactly as submitted. There is no id field.
    """

    title: str = ""
    release_date: str = ""
    genre: str = ""
    price: str = ""
    rating: str = ""
    errors: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_movie(cls, movie: Any) -> "MovieForm":
        return cls(
            title=movie.title or "",
            release_date=movie.release_date.isoformat() if movie.release_date else "",
            genre=movie.genre or "",
            price=f"{movie.price:.2f}" if movie.price is not None else "",
            rating=movie.rating or "",
        )

    def validate(self) -> Dict[str, Any]:
        """
        Check every field and return the parsed column values.

        Field errors are collected in self.errors; the returned dict is only
        meaningful when self.errors is empty.
        """
        self.errors = {}
        values: Dict[str, Any] = {}

        title = (self.title or "").strip()
        if not title:
            self.errors["title"] = "The Title field is required."
        elif not TITLE_MIN <= len(title) <= TITLE_MAX:
            self.errors["title"] = f"Title must be between {TITLE_MIN} and {TITLE_MAX} characters."
        values["title"] = title

        values["release_date"] = _parse_date(self.release_date, self.errors)
        values["price"] = _parse_price(self.price, self.errors)

        genre = (self.genre or "").strip()
        if not genre:
            self.errors["genre"] = "The Genre field is required."
        elif len(genre) > GENRE_MAX:
            self.errors["genre"] = f"Genre must be at most {GENRE_MAX} characters."
        elif not GENRE_PATTERN.fullmatch(genre):
            self.errors["genre"] = "Genre must start with an uppercase letter and contain only letters."
        values["genre"] = genre

        rating = (self.rating or "").strip()
        if not rating:
            self.errors["rating"] = "The Rating field is required."
        elif len(rating) > RATING_MAX:
            self.errors["rating"] = f"Rating must be at most {RATING_MAX} characters."
        elif not RATING_PATTERN.fullmatch(rating):
            self.errors["rating"] = "Rating must start with an uppercase letter."
        values["rating"] = rating
        return values

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _parse_date(raw: str, errors: Dict[str, str]) -> Optional[date]:
    value = (raw or "").strip()
    if not value:
        errors["release_date"] = "The Release Date field is required."
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        errors["release_date"] = "Release Date must be a date (YYYY-MM-DD)."
        return None


def _parse_price(raw: str, errors: Dict[str, str]) -> Optional[Decimal]:
    value = (raw or "").strip()
    if not value:
        errors["price"] = "The Price field is required."
        return None
    try:
        price = Decimal(value)
    except InvalidOperation:
        errors["price"] = "Price must be a number."
        return None
    if not price.is_finite():
        errors["price"] = "Price must be a number."
        return None
    if not PRICE_MIN <= price <= PRICE_MAX:
        errors["price"] = f"Price must be between {PRICE_MIN} and {PRICE_MAX}."
    elif price.as_tuple().exponent < -2:
        errors["price"] = "Price can have at most two decimal places."
    return price


def fill_missing_labels(movie: Any) -> bool:
    """Patch null genre/rating on a loaded movie. Returns True when changed."""
    changed = False
    for column, placeholder in MISSING_LABEL_DEFAULTS.items():
        if getattr(movie, column) is None:
            setattr(movie, column, placeholder)
            changed = True
    return changed
