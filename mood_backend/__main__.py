from __future__ import annotations

import uvicorn

from mood_backend.core.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mood_backend.main:app",
        host=settings.host,
        port=int(settings.port),
        # Logging is configured by mood_backend.core.logging (JSON to stdout).
        log_config=None,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
