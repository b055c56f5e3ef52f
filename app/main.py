import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import Base, engine
from app.core.errors import CRMError, issue
from app.core.logging_config import setup_logging
from app.api import auth, leads, door_activity, crm, calendar, ai, map_markers, users

from app.models import *

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Field Sales CRM")

# -------------------------
# CORS (Allow Frontend Cookies)
# -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------
# Error handlers
# -------------------------
@app.exception_handler(CRMError)
def handle_crm_error(request: Request, exc: CRMError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    issues = [
        issue(
            [p for p in err.get("loc", ()) if p not in ("body", "query", "path")],
            err.get("msg", "Invalid value"),
            err.get("type", "value_error"),
        )
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": issues})


@app.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

# -------------------------
# Include Routers
# -------------------------
app.include_router(auth.router)
app.include_router(leads.router)
app.include_router(door_activity.router)
app.include_router(crm.router)
app.include_router(calendar.router)
app.include_router(ai.router)
app.include_router(map_markers.router)
app.include_router(users.router)

# -------------------------
# DB INIT
# -------------------------
Base.metadata.create_all(bind=engine)

@app.get("/")
def root():
    return {"status": "running"}
