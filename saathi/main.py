import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from saathi.core.config import get_settings
from saathi.core.logging import setup_logging
from saathi.routers import calculator, chat, documents, extract, notes, quiz, roadmap, system

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API backend de Project Saathi (quiz, notes, roadmaps, analyse de documents, chat, calculatrice)",
    )

    # Middleware CORS
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(system.router)
    app.include_router(chat.router)
    app.include_router(extract.router)
    app.include_router(quiz.router)
    app.include_router(notes.router)
    app.include_router(roadmap.router)
    app.include_router(documents.router)
    app.include_router(calculator.router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    logger.info("%s %s démarrée (env=%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    return app


app = create_app()
