import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from wingman.config import get_settings
from wingman.api import chat, history, system


def configure_logging() -> None:
    settings = get_settings()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()
    logger.info("Starting Wingman backend...")
    logger.info(f"Forwarding completions to {settings.completions_url}")
    yield
    logger.info("Wingman backend shut down")


app = FastAPI(
    title="Wingman API",
    version=get_settings().app_version,
    description="Dating coach and reply generator backed by OpenRouter",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat.router)
app.include_router(history.router)
app.include_router(system.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else jsonable_encoder(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
    )


@app.get("/")
async def root():
    return {"message": "Wingman API", "version": get_settings().app_version, "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("wingman.main:app", host="0.0.0.0", port=8000)
