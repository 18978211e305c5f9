from __future__ import annotations

from dataclasses import fields
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from catalog.domain.movies import ListingFilters, MovieForm, fill_missing_labels, parse_movie_id


def test_valid_form_parses_values():
    form = MovieForm(title=" Ghostbusters ", release_date="1984-03-13", genre="Comedy", price="8.99", rating="PG-13")
    values = form.validate()
    assert form.is_valid
    assert values == {
        "title": "Ghostbusters",
        "release_date": date(1984, 3, 13),
        "genre": "Comedy",
        "price": Decimal("8.99"),
        "rating": "PG-13",
    }


def test_form_has_no_id_field():
    assert "id" not in {f.name for f in fields(MovieForm)}


def test_invalid_fields_are_reported():
    form = MovieForm(title="Ok", release_date="13/03/1984", genre="comedy", price="0.5", rating="toolong")
    form.validate()
    assert set(form.errors) == {"title", "release_date", "genre", "price", "rating"}


def test_missing_fields_are_required():
    form = MovieForm()
    form.validate()
    assert set(form.errors) == {"title", "release_date", "genre", "price", "rating"}
    assert "required" in form.errors["title"]


def test_price_precision_and_garbage():
    form = MovieForm(title="Title", release_date="2000-01-01", genre="Drama", price="9.999", rating="R")
    form.validate()
    assert "price" in form.errors
    form.price = "abc"
    form.validate()
    assert form.errors == {"price": "Price must be a number."}


def test_from_movie_round_trips_display_values():
    movie = SimpleNamespace(title="Rio Bravo", release_date=date(1959, 4, 15), genre=None, price=Decimal("3.99"), rating="NR")
    form = MovieForm.from_movie(movie)
    assert form.release_date == "1959-04-15"
    assert form.price == "3.99"
    assert form.genre == ""


def test_listing_filters_from_query():
    assert ListingFilters.from_query(genre=" ", search="", release_year="") == ListingFilters()
    assert ListingFilters.from_query(genre="Drama", search="TASY", release_year="2000") == ListingFilters(
        genre="Drama", search="TASY", release_year=2000
    )
    assert ListingFilters.from_query(release_year="nineteen").release_year is None


def test_fill_missing_labels():
    movie = SimpleNamespace(genre=None, rating="PG")
    assert fill_missing_labels(movie) is True
    assert (movie.genre, movie.rating) == ("Unknown", "PG")
    assert fill_missing_labels(movie) is False


def test_release_year_outside_range_is_dropped():
    for raw in ("²", "99999999999999999999", "0", "10000", "20 00"):
        assert ListingFilters.from_query(release_year=raw).release_year is None
    assert ListingFilters.from_query(release_year="9999").release_year == 9999


def test_parse_movie_id_bounds():
    assert parse_movie_id("42") == 42
    assert parse_movie_id(" 7 ") == 7
    assert parse_movie_id(str(2**63 - 1)) == 2**63 - 1
    for raw in (None, "", "0", "-1", "²", "١٢", "4.2", str(2**63)):
        assert parse_movie_id(raw) is None
