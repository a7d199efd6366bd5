import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.products import router as products_router
from app.config import get_settings
from app.db.engine import get_engine
from app.db.migrations import apply_migrations

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema must be current before the first request; a failure here aborts
    # startup and the server never binds.
    engine = get_engine()
    applied = apply_migrations(engine)
    if applied:
        logger.info("Applied migrations: %s", applied)

    yield

    engine.dispose()


app = FastAPI(
    title="Product API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(products_router)
