"""Run the catalog with uvicorn: python -m catalog."""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "catalog.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=(os.getenv("APP_ENV") or "dev").lower() == "dev",
    )


if __name__ == "__main__":
    main()
