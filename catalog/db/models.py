"""SQLAlchemy model for the movie catalog."""
from __future__ import annotations

from sqlalchemy import Column, Date, Integer, Numeric, String

from .session import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(60), nullable=True)
    release_date = Column(Date, nullable=False)
    # genre and rating are nullable in storage; listing repairs them.
    genre = Column(String(30), nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    rating = Column(String(5), nullable=True)

    def __repr__(self) -> str:
        return f"<Movie id={self.id} title={self.title!r}>"
