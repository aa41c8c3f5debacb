"""LMS assignments — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from strawberry.fastapi import GraphQLRouter

from app.adapters.persistence.database import engine
from app.config import settings
from app.infrastructure.api.routes_health import router as health_router
from app.infrastructure.graphql.context import get_context
from app.infrastructure.graphql.schema import schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the database once on startup; dispose of the pool on shutdown."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Starting without a database connection: %s", e)
    else:
        logger.info("Database reachable at %s", engine.url.render_as_string(hide_password=True))
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="LMS Assignments",
        description="Assignment editing and per-section/group/student date overrides",
        version="0.1.0",
        lifespan=lifespan,
    )

    graphql_app = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql else None,
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(graphql_app, prefix="/graphql")

    return app


app = create_app()
