import logging
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hoteltrek.config import settings
from hoteltrek.core.rate_limit import limiter
from hoteltrek.modules.uploads.storage import UPLOADS_ROUTE
from hoteltrek.modules.auth import routes as auth_routes
from hoteltrek.modules.profiles import routes as profile_routes
from hoteltrek.modules.admin import routes as admin_routes
from hoteltrek.modules.maps import routes as map_routes
from hoteltrek.modules.bookings import routes as booking_routes
from hoteltrek.modules.reviews import routes as review_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

upload_dir = Path(settings.upload_dir).resolve()
upload_dir.mkdir(parents=True, exist_ok=True)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
    return JSONResponse(status_code=500, content={"message": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


cors_origins = settings.get_cors_origins_list()
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    # Browsers reject credentialed requests against a wildcard origin
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded images (hotel galleries, profile pictures)
app.mount(UPLOADS_ROUTE, StaticFiles(directory=str(upload_dir), check_dir=False), name="uploads")

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(profile_routes.router, prefix="/api")
app.include_router(admin_routes.router, prefix="/api/admin")
app.include_router(map_routes.router, prefix="/api/admin")
app.include_router(booking_routes.router, prefix="/api")
app.include_router(review_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Server is running on port %s", settings.port)
    logger.info("Upload directory: %s", upload_dir)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Server terminated")


@app.get("/")
async def root():
    return {"message": "Welcome to hoteltrek-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe"""
    return {"status": "ready"}
