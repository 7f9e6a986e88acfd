"""FastAPI application for the study planner API"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes import auth, study_blocks, tasks
from backend.config import settings
from backend.database import init_db
from backend.errors import register_exception_handlers
from backend.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(create_tables: bool = True) -> FastAPI:
    configure_logging()
    if create_tables:
        init_db()

    app = FastAPI(title="Study Planner API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(study_blocks.router)
    app.include_router(tasks.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    logger.info("API ready (ai_provider=%s)", settings.ai_provider)
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.main:create_app", factory=True, host="0.0.0.0", port=8000)
