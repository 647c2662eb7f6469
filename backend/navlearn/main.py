import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from navlearn.core.config import settings
from navlearn.api.api_router import api_router
from navlearn.core.storage import DataRepository, get_repository
from navlearn.core.uploads import get_upload_dir
from navlearn.core.tracing import setup_tracing

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    setup_tracing()

    yield

    # Shutdown


app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALL_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)

# Uploaded module content; the directory is created at startup
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed JSON and missing fields as 400s."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        logger.error(f"JSON parse error on {request.url.path}: {errors}")
        return JSONResponse(status_code=400, content={"detail": "Invalid JSON in request body"})

    return JSONResponse(
        status_code=400,
        content={
            "detail": "Missing fields",
            "errors": [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in errors],
        },
    )


@app.get("/healthz")
def health_check(
    repository: DataRepository = Depends(get_repository),
    upload_dir: Path = Depends(get_upload_dir),
):
    """Health check reporting the data store and upload directory."""
    health_status = {
        "status": "healthy",
        "services": {
            "store": "unknown",
            "uploads": "unknown",
        }
    }

    try:
        data = repository.read()
        health_status["services"]["store"] = "healthy"
        health_status["knowledge_documents"] = len(data.knowledge)
    except Exception as e:
        health_status["services"]["store"] = f"unhealthy: {str(e)}"
        health_status["status"] = "degraded"

    if upload_dir.is_dir():
        health_status["services"]["uploads"] = "healthy"
    else:
        health_status["services"]["uploads"] = "missing"
        health_status["status"] = "degraded"

    return health_status
