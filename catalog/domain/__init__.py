"""Domain helpers: input shaping and validation rules for movies."""
