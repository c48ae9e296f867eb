import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from charter.api.v1.api import api_router
from charter.core.config import settings
from charter.core.database import async_engine
from charter.core.exception_handlers import EXCEPTION_HANDLERS
from charter.models.base import Base

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Yacht Charter API",
    description="Yacht and services catalog, pricing, promotions, bookings and WhatsApp links",
    version="1.0.0",
)

for exception_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exception_class, handler)


@app.on_event("startup")
async def create_tables():
    # Alembic owns the schema in production; this covers fresh local databases
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "Charter API ready (currency %s, VAT %s)", settings.CURRENCY, settings.VAT_RATE
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"name": app.title, "version": app.version, "docs": app.docs_url}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("charter.main:app", host="0.0.0.0", port=8000)
