from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from budget_tracker.config import Settings, get_settings
from budget_tracker.database import Base, build_engine, build_session_factory
from budget_tracker.errors import register_error_handlers
from budget_tracker.log import configure_logging
from budget_tracker.security.tokens import TokenService
from budget_tracker.transactions.router import router as transaction_router
from budget_tracker.transactions.schemas import SUGGESTED_CATEGORIES, SuggestedCategories
from budget_tracker.users.routers import router as user_router


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    Base.metadata.create_all(bind=app.state.engine)
    yield
    app.state.engine.dispose()
    logger.info("Application shutdown")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    log_sink = configure_logging(settings)

    app = FastAPI(
        title="BUDGET TRACKER",
        description="An API for recording income and expense transactions behind token based sessions.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Application context, one per app instance
    app.state.settings = settings
    app.state.log_sink = log_sink
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.token_service = TokenService.from_settings(settings)

    # CORS (the refresh cookie needs credentials)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(user_router, tags=["Auth"])
    app.include_router(transaction_router, prefix="/auth", tags=["Transactions"])

    @app.get("/categories", response_model=SuggestedCategories)
    def suggested_categories():
        return SUGGESTED_CATEGORIES

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


def run():
    settings = get_settings()
    logger.info(f"Running on {settings.HOST}:{settings.PORT}")
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
