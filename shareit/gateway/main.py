import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .client import ServerUnavailable
from .config import settings
from .routers import booking_router, item_router
from .validators import GatewayValidationError

logging.basicConfig(level=settings.LOG_LEVEL)

logger = logging.getLogger("shareit_gateway")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Opens the shared HTTP client to the server and closes it on shutdown.
    """
    logger.info(f"Gateway starting, forwarding to {settings.SERVER_URL}")
    app.state.http_client = httpx.AsyncClient(
        base_url=settings.SERVER_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )

    yield  # The application is now running

    logger.info("Gateway shutting down...")
    await app.state.http_client.aclose()


app = FastAPI(
    title="ShareIt Gateway",
    description="Validates requests and forwards them to the ShareIt server.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(booking_router.router)
app.include_router(item_router.router)


@app.exception_handler(GatewayValidationError)
async def handle_gateway_validation(request: Request, exc: GatewayValidationError):
    logger.warning(f"Gateway validation failed: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = {".".join(str(p) for p in e["loc"]): e["msg"] for e in exc.errors()}
    logger.warning(f"Gateway request validation failed: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


@app.exception_handler(ServerUnavailable)
async def handle_server_unavailable(request: Request, exc: ServerUnavailable):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "ShareIt server is unavailable"},
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to the ShareIt Gateway"}
