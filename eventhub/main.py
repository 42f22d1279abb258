import os
import logging
from datetime import datetime, timezone
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from . import routers
from .database import check_db_connection, init_db, session_scope
from .schemas.common import HealthResponse
from .utils.router_helpers import RouterResponse
from .utils.seed import seed_default_admin, seed_sample_venues

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]

# Initialize FastAPI app
app = FastAPI(
    title="EventHub API",
    description="Event management: organizers, venues, events and ticketing",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create tables and seed the bootstrap data"""
    logger.info("Starting EventHub API")
    init_db()
    with session_scope() as db:
        seed_default_admin(db)
        seed_sample_venues(db)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=RouterResponse.error(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"

    logger.warning(f"Request validation failed on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=RouterResponse.error(
            message, details=[{"loc": e.get("loc"), "msg": e.get("msg")} for e in errors]
        ),
    )


# Include routers
app.include_router(routers.auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(routers.users.router, prefix="/api/users", tags=["users"])
app.include_router(routers.events.router, prefix="/api/events", tags=["events"])
app.include_router(routers.venues.router, prefix="/api/venues", tags=["venues"])
app.include_router(
    routers.organizers.router, prefix="/api/organizers", tags=["organizers"]
)
app.include_router(routers.organizer.router, prefix="/api/organizer", tags=["organizer"])
app.include_router(routers.admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/")
async def root():
    return {"message": "Welcome to EventHub API", "status": "running"}


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        timestamp=datetime.now(timezone.utc), database=check_db_connection()
    )


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
