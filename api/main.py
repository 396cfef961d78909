# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Description: main.py
# -----------------------------------------------------------------------------
from fastapi import FastAPI
from api.routers import health, search, index
import logging

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Folio Search API")
app.include_router(health.router)
app.include_router(search.router)
app.include_router(index.router)


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("FOLIO_API_HOST", "127.0.0.1"),
        port=int(os.getenv("FOLIO_API_PORT", "8000")),
        log_level="info",
        reload=False,
    )
