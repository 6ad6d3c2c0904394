# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, get_settings
from database import Database
from services.locks import BuyerLockRegistry
from utils.error_handlers import register_error_handlers

# Routers
from routes.directory import buyers_router, suppliers_router, categories_router, pickup_points_router
from routes.products import router as products_router
from routes.cart import router as cart_router
from routes.orders import router as orders_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    database = Database(settings.DATABASE_URL, timeout=settings.DB_TIMEOUT_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Connect on startup, release the pool on shutdown
        database.connect()
        try:
            yield
        finally:
            database.close()

    app = FastAPI(title=settings.APP_TITLE, version="1.0.0", lifespan=lifespan, docs_url="/api-docs")
    app.state.settings = settings
    app.state.database = database
    app.state.checkout_locks = BuyerLockRegistry()

    # CORS Configuration
    origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Router registration
    app.include_router(buyers_router)
    app.include_router(suppliers_router)
    app.include_router(categories_router)
    app.include_router(pickup_points_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(orders_router)

    @app.get("/")
    def read_root():
        return {"message": "Storefront API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
