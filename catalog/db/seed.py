"""Demo data inserted into an empty catalog on startup."""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from .models import Movie
from .session import get_session

logger = logging.getLogger(__name__)

DEMO_MOVIES = (
    {
        "title": "When Harry Met Sally",
        "release_date": date(1989, 2, 12),
        "genre": "Romantic Comedy",
        "price": Decimal("7.99"),
        "rating": "R",
    },
    {
        "title": "Ghostbusters",
        "release_date": date(1984, 3, 13),
        "genre": "Comedy",
        "price": Decimal("8.99"),
        "rating": "PG",
    },
    {
        "title": "Ghostbusters 2",
        "release_date": date(1986, 2, 23),
        "genre": "Comedy",
        "price": Decimal("9.99"),
        "rating": "PG",
    },
    {
        "title": "Rio Bravo",
        "release_date": date(1959, 4, 15),
        "genre": "Western",
        "price": Decimal("3.99"),
        "rating": "NR",
    },
)


def seed_demo_movies() -> int:
    """Insert the demo movies when the table is empty. Returns rows inserted."""
    with get_session() as session:
        existing = session.execute(select(func.count(Movie.id))).scalar_one()
        if existing:
            return 0
        session.add_all([Movie(**row) for row in DEMO_MOVIES])
        session.commit()
    logger.info("Seeded %d demo movies", len(DEMO_MOVIES))
    return len(DEMO_MOVIES)
