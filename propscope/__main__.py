"""
Run the API server: ``python -m propscope``.
"""

import uvicorn

from propscope.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "propscope.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
