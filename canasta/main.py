import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from canasta.core.config import get_settings
from canasta.core.logging import setup_logging
from canasta.db.init import init_db
from canasta.db.session import check_db_health, close_db
from canasta.api import categories, locations, producers, products

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize logging and database
@app.on_event("startup")
async def startup_event():
    setup_logging(settings)
    await init_db()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)

@app.on_event("shutdown")
async def shutdown_event():
    await close_db()

# Include routers
app.include_router(products.router, prefix="/products", tags=["products"])
app.include_router(categories.router, prefix="/categories", tags=["categories"])
app.include_router(locations.router, prefix="/locations", tags=["locations"])
app.include_router(producers.router, prefix="/producers", tags=["producers"])

@app.get("/")
def read_root():
    return {"message": "Welcome to Canasta Campesina API"}

@app.get("/health")
async def health():
    return await check_db_health()
