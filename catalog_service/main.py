from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from catalog_service.config.config import config
from catalog_service.config.logger_config import log
from catalog_service.infrastructure.database import session as database
from catalog_service.infrastructure.database.seed import seed_catalog
from catalog_service.interfaces.http.category import router as category_router
from catalog_service.interfaces.http.product import router as product_router
from shared.libs.observability.metrics import SERVICE_HEALTH, create_metrics_endpoint
from shared.libs.observability.middleware import metrics_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan handler: runs on startup and shutdown.
    Initializes the database engine and seeds an empty catalog.
    """
    log.info("Starting catalog-service initialization")

    # Startup
    try:
        database.init_sqlmodel()
        log.info("Database engine initialized")

        if config.SEED_ON_STARTUP:
            with Session(database.engine) as session:
                seed_catalog(session)
    except Exception as e:
        log.critical("Failed to initialize dependencies", error=str(e), exc_info=True)
        raise

    yield

    # Shutdown
    database.dispose_engine()
    log.info("catalog-service shutdown complete")


app = FastAPI(
    title="catalog-service",
    description="Category, subcategory and product catalog",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/")
def read_root():
    return {"message": "Hello from catalog-service!"}


@app.get("/health")
async def health_check():
    """Health check endpoint for liveness probe."""
    db_healthy = database.ping()
    SERVICE_HEALTH.set(1 if db_healthy else 0)

    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "connected" if db_healthy else "disconnected",
    }


app.middleware("http")(metrics_middleware)
app.include_router(category_router)
app.include_router(product_router)
metrics_endpoint = create_metrics_endpoint()
app.add_api_route("/metrics", metrics_endpoint, name="metrics", include_in_schema=False)
