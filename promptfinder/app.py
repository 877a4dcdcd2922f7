# ============================================================
# PromptFinder Search API
# ------------------------------------------------------------
# HTTP boundary for the prompt search engine:
#   - POST /search with {query, limit?}
#   - caller identity from the X-User-Id header (absent => public only)
#   - InvalidArgument (incl. unparseable JSON) -> 400, Internal -> 500
# ============================================================

from functools import lru_cache
from typing import Any, List, Optional

from fastapi import Body, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# --- Local imports ---
from promptfinder.logs import get_logger
from promptfinder.search import (
    InternalError,
    InvalidArgumentError,
    SearchConfig,
    SearchEngine,
    SearchError,
)
from promptfinder.settings import settings
from promptfinder.store import SqliteRecordStore

logger = get_logger("promptfinder.api")

# ------------------------------------------------------------
# 🔧 Engine wiring
# ------------------------------------------------------------
@lru_cache(maxsize=1)
def get_engine() -> SearchEngine:
    store = SqliteRecordStore(settings.DB_PATH)
    store.init_schema()
    return SearchEngine(
        store=store,
        config=SearchConfig.from_settings(settings),
        store_timeout=settings.STORE_TIMEOUT_SECONDS,
    )

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="PromptFinder Search API", version="0.3")

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class SearchResultItem(BaseModel):
    id: str
    title: str
    description: str
    text: str
    category: str
    tags: List[str]
    isPrivate: bool
    userId: str
    score: float
    fieldsMatched: List[str]
    isExactMatch: bool
    matchedIn: List[str]

class SearchPayload(BaseModel):
    results: List[SearchResultItem]
    total: int
    durationMs: float
    message: str

# ------------------------------------------------------------
# ⚠️ Error envelope
# ------------------------------------------------------------
STATUS_CODES = {
    InvalidArgumentError: 400,
    InternalError: 500,
}

@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error("search request failed: %s", exc.error_type.value)
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # unparseable JSON body; reported with the same envelope as an empty query
    err = InvalidArgumentError("Request body must be valid JSON.")
    return JSONResponse(status_code=400, content={"error": err.to_dict()})

# ------------------------------------------------------------
# 🔎 Search route
# ------------------------------------------------------------
@app.post("/search", response_model=SearchPayload)
def search(
    payload: Any = Body(None),
    user_id: Optional[str] = Header(None, alias="X-User-Id"),
    engine: SearchEngine = Depends(get_engine),
):
    response = engine.search(payload, requester_id=user_id)
    return response.to_dict()

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.app_name,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": "PromptFinder search service running."}
