"""
High-level use cases for the movie catalog.

Routers call these services instead of opening database sessions directly.
"""
