import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trubalance.api.routes import api_router
from trubalance.api.v1 import v1_router
from trubalance.api.v1.envelope import error
from trubalance.config.settings import settings
from trubalance.core.db import engine
from trubalance.core.logging_config import setup_logging
from trubalance.domain.errors import CalculatorError
import trubalance.infrastructure.db.models  # noqa: F401  registers tables on Base
from trubalance.infrastructure.db.base import Base

setup_logging()
logger = logging.getLogger("main")

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENVIRONMENT)


@app.exception_handler(CalculatorError)
async def calculator_error_handler(request: Request, exc: CalculatorError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content=error(str(exc), errors=[{"type": type(exc).__name__}]),
    )


app.include_router(api_router)
app.include_router(v1_router)
