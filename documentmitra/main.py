from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from documentmitra.api.api import api_router
from documentmitra.core.config import settings
from documentmitra.core.logging_config import setup_logging
from documentmitra.db.database import init_db, close_db, AsyncSessionLocal
from documentmitra.db.seed import seed_data
from documentmitra.services.catalog_service import catalog

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup: create tables, seed data, load the catalog
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_data(session)
    await catalog.refresh()
    yield
    # Shutdown: close database connections
    await close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {"message": "Welcome to Documentmitra Backend", "version": "0.1.0"}
