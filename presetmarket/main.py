# presetmarket/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from . import __version__
from .cart import cart_router
from .catalog import catalog_router
from .logging_setup import get_logger
from .storage import init_db

logger = get_logger("presetmarket")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("database ready")
    yield


app = FastAPI(
    title="Preset Market",
    description=(
        "Marketplace for synth presets and preset packs: catalog search, "
        "item management, cart and wishlist."
    ),
    version=__version__,
    lifespan=lifespan,
)


# Errors are always answered as {"error": "<message>"}.
@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())})


@app.get("/")
def health_check():
    return {"status": "ok", "message": "Preset Market live"}


app.include_router(catalog_router)
app.include_router(cart_router)
