import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import models
from .config import settings
from .database import engine
from .exceptions import InvalidState, NotFound, Unauthorized
from .routers import booking_router, item_router

logging.basicConfig(level=settings.LOG_LEVEL)

# Setup logger
logger = logging.getLogger("shareit_server")

# Create database tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="ShareIt Server",
    description="Bookings of shared items and comments on finished rentals.",
    version="1.0.0",
)

app.include_router(booking_router.router)
app.include_router(item_router.router)


@app.exception_handler(NotFound)
async def handle_not_found(request: Request, exc: NotFound):
    logger.warning(f"Not found: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(InvalidState)
async def handle_invalid_state(request: Request, exc: InvalidState):
    logger.warning(f"Rejected by business rule: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(Unauthorized)
async def handle_unauthorized(request: Request, exc: Unauthorized):
    logger.warning(f"Access denied: {exc.message}")
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to the ShareIt Server"}
