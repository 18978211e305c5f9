from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog.core import csrf
from catalog.domain.movies import ListingFilters, MovieForm, parse_movie_id
from catalog.services.movie_service import (
    CatalogConfigurationError,
    MovieNotFoundError,
    MovieService,
    MovieValidationError,
)

router = APIRouter(prefix="/movies", tags=["movies"])

LIST_URL = "/movies"


def _get_movie_service(request: Request) -> MovieService:
    svc = getattr(getattr(request.app, "state", None), "movie_service", None)
    if not svc:
        raise RuntimeError("MovieService is not configured")
    return svc


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates are not configured")


def _render(request: Request, template: str, context: dict, status_code: int = 200) -> HTMLResponse:
    """Render a page carrying a fresh CSRF token for any form on it."""
    token = csrf.ensure_csrf_token(request)
    payload = {"csrf_token": token, **context}
    response = _templates(request).TemplateResponse(request, template, payload, status_code=status_code)
    csrf.set_csrf_cookie(response, token)
    return response


def _not_found(request: Request) -> HTMLResponse:
    return _render(request, "not_found.html", {"title": "Not found"}, status_code=404)


def _redirect_to_list() -> RedirectResponse:
    return RedirectResponse(LIST_URL, status_code=303)


@router.get("", response_class=HTMLResponse)
def index(request: Request, genre: str = "", search: str = "", release_year: str = ""):
    svc = _get_movie_service(request)
    filters = ListingFilters.from_query(genre=genre, search=search, release_year=release_year)
    try:
        listing = svc.list_movies(filters)
    except CatalogConfigurationError as exc:
        return _render(request, "problem.html", {"title": "Configuration error", "detail": str(exc)}, status_code=500)
    return _render(
        request,
        "movies/index.html",
        {"title": "Movies", "movies": listing.movies, "genres": listing.genres, "filters": listing.filters},
    )


@router.get("/details", response_class=HTMLResponse)
@router.get("/details/{movie_id}", response_class=HTMLResponse)
def details(request: Request, movie_id: Optional[str] = None):
    svc = _get_movie_service(request)
    try:
        movie = svc.get_movie(parse_movie_id(movie_id))
    except MovieNotFoundError:
        return _not_found(request)
    return _render(request, "movies/details.html", {"title": "Details", "movie": movie})


@router.get("/create", response_class=HTMLResponse)
def create_form(request: Request):
    return _render(request, "movies/create.html", {"title": "Create", "form": MovieForm()})


@router.post("/create", response_class=HTMLResponse)
def create_submit(
    request: Request,
    title: str = Form(""),
    release_date: str = Form(""),
    genre: str = Form(""),
    price: str = Form(""),
    rating: str = Form(""),
    csrf_token: str = Form(""),
):
    csrf.validate_csrf(request, csrf_token)
    svc = _get_movie_service(request)
    form = MovieForm(title=title, release_date=release_date, genre=genre, price=price, rating=rating)
    try:
        svc.create_movie(form)
    except MovieValidationError as exc:
        return _render(request, "movies/create.html", {"title": "Create", "form": exc.form}, status_code=400)
    return _redirect_to_list()


@router.get("/edit", response_class=HTMLResponse)
@router.get("/edit/{movie_id}", response_class=HTMLResponse)
def edit_form(request: Request, movie_id: Optional[str] = None):
    svc = _get_movie_service(request)
    try:
        movie = svc.get_movie(parse_movie_id(movie_id))
    except MovieNotFoundError:
        return _not_found(request)
    return _render(
        request,
        "movies/edit.html",
        {"title": "Edit", "movie_id": movie.id, "form": MovieForm.from_movie(movie)},
    )


@router.post("/edit/{movie_id}", response_class=HTMLResponse)
def edit_submit(
    request: Request,
    movie_id: str,
    form_id: str = Form("", alias="id"),
    title: str = Form(""),
    release_date: str = Form(""),
    genre: str = Form(""),
    price: str = Form(""),
    rating: str = Form(""),
    csrf_token: str = Form(""),
):
    csrf.validate_csrf(request, csrf_token)
    svc = _get_movie_service(request)
    path_id = parse_movie_id(movie_id)
    if path_id is None:
        return _not_found(request)
    form = MovieForm(title=title, release_date=release_date, genre=genre, price=price, rating=rating)
    try:
        svc.update_movie(path_id, form, form_id=parse_movie_id(form_id))
    except MovieNotFoundError:
        return _not_found(request)
    except MovieValidationError as exc:
        return _render(
            request,
            "movies/edit.html",
            {"title": "Edit", "movie_id": path_id, "form": exc.form},
            status_code=400,
        )
    return _redirect_to_list()


@router.get("/delete", response_class=HTMLResponse)
@router.get("/delete/{movie_id}", response_class=HTMLResponse)
def delete_confirm(request: Request, movie_id: Optional[str] = None):
    svc = _get_movie_service(request)
    try:
        movie = svc.confirm_delete(parse_movie_id(movie_id))
    except MovieNotFoundError:
        return _not_found(request)
    return _render(request, "movies/delete.html", {"title": "Delete", "movie": movie})


@router.post("/delete/{movie_id}")
def delete_submit(request: Request, movie_id: str, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    path_id = parse_movie_id(movie_id)
    if path_id is not None:
        _get_movie_service(request).delete_movie(path_id)
    return _redirect_to_list()
