# run_dev.py
"""
Local development launcher for the search API.
Host, port and log level come from promptfinder.settings (.env.dev / env vars).
"""

import uvicorn

from promptfinder.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "promptfinder.app:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )
