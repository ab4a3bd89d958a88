"""Run the API server.

Usage:
    python -m journal
"""

import uvicorn

from journal.config import settings


def main():
    uvicorn.run(
        "journal.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
