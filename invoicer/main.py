import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicer.api.routes import router as root_router
from invoicer.api.v1 import v1_router
from invoicer.api.v1.envelope import error, validation_details
from invoicer.config.settings import settings
from invoicer.core.db import engine
from invoicer.core.logging_config import setup_logging
from invoicer.domain.exceptions import InvoicerError
from invoicer.infrastructure.db import models  # noqa: F401  (registers tables on Base.metadata)
from invoicer.infrastructure.db.base import Base

setup_logging()
logger = logging.getLogger("main")

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENVIRONMENT)


@app.exception_handler(InvoicerError)
async def invoicer_error_handler(request: Request, exc: InvoicerError):
    logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=error(str(exc)))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=error("Validation failed", validation_details(exc.errors())),
    )


app.include_router(root_router)
app.include_router(v1_router)
