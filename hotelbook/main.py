import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .errors import HotelBookError
from .routers import api, admin
from .store import get_store

# --- Logging configuration ---
_level = logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("hotelbook.startup")
logger.info("Starting %s (DEBUG=%s)", settings.APP_NAME, getattr(settings, "DEBUG", False))

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=(
        f"{settings.APP_NAME}: room booking, receipts and revenue reports.\n\n"
        "Customer endpoints live under /api/v1, administrator endpoints under /api/v1/admin. "
        "Session-cookie based auth."
    ),
)


@app.on_event("startup")
def startup_event():
    """Creates the data directory, seed rooms and admin secret when missing."""
    logger.info("Running startup tasks...")
    get_store().bootstrap()
    logger.info("Startup tasks complete.")


@app.exception_handler(HotelBookError)
async def hotelbook_error_handler(request: Request, exc: HotelBookError):
    logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(api.router)
app.include_router(admin.router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
