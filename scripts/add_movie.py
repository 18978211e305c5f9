#!/usr/bin/env python3
"""
Add a movie to the catalog database.

Usage:
  python scripts/add_movie.py --title "Rio Bravo" --release-date 1959-04-15 --genre Western --price 3.99 --rating NR
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the catalog package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.domain.movies import MovieForm
from catalog.services.movie_service import MovieService, MovieValidationError


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a movie to the catalog")
    ap.add_argument("--title", required=True)
    ap.add_argument("--release-date", required=True, help="YYYY-MM-DD")
    ap.add_argument("--genre", required=True)
    ap.add_argument("--price", required=True)
    ap.add_argument("--rating", required=True)
    args = ap.parse_args()

    form = MovieForm(
        title=args.title,
        release_date=args.release_date,
        genre=args.genre,
        price=args.price,
        rating=args.rating,
    )
    try:
        movie = MovieService().create_movie(form)
    except MovieValidationError as exc:
        for name, message in exc.errors.items():
            sys.stderr.write(f"  {name}: {message}\n")
        raise SystemExit("Invalid movie")
    print("OK: movie added")
    print(f"  ID: {movie.id}")
    print(f"  Title: {movie.title}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
