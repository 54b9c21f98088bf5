"""Item Options – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from itemoptions.config import get_settings
from itemoptions.database import Base, engine
from itemoptions.exceptions import (
    DuplicateSingleValueOption,
    InconsistentMultiValue,
    IneligibleHost,
    InvalidConfiguration,
    MissingRow,
    UndefinedOptionKey,
)
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from itemoptions.models import ItemOption, Property  # noqa: F401
from itemoptions.routers import options, properties

settings = get_settings()
logging.getLogger("itemoptions").setLevel(settings.log_level)
log = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.include_router(properties.router)
app.include_router(options.router)


@app.exception_handler(UndefinedOptionKey)
def undefined_option_handler(request: Request, exc: UndefinedOptionKey):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(IneligibleHost)
def ineligible_host_handler(request: Request, exc: IneligibleHost):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(InconsistentMultiValue)
def inconsistent_value_handler(request: Request, exc: InconsistentMultiValue):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(DuplicateSingleValueOption)
@app.exception_handler(MissingRow)
@app.exception_handler(InvalidConfiguration)
def consistency_error_handler(request: Request, exc: Exception):
    # Stored rows or definitions are broken; needs fixing, not retrying
    log.error("Item options consistency error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Item options are in an inconsistent state."})


@app.on_event("startup")
def startup():
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        log.warning("Database startup failed (tables skipped). Check DATABASE_URL. Error: %s", e)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
