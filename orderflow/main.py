# orderflow/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from orderflow.api.routers import analytics, health, orders
from orderflow.data.database import Base, engine, init_db
from orderflow.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables.keys())} on {engine.url.render_as_string(hide_password=True)}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(orders.router)
    app.include_router(analytics.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("orderflow.main:app", host="0.0.0.0", port=8000)
