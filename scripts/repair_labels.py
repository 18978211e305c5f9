#!/usr/bin/env python3
"""Replace null genre/rating values with their placeholders in one pass."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.services.movie_service import MovieService


def main() -> None:
    svc = MovieService()
    repaired = svc.repair_missing_labels() + svc.repair_missing_labels(defensive=True)
    print(f"Repairs applied: {repaired}")


if __name__ == "__main__":
    main()
