"""Movie catalog web application."""
