# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.data.database import Base, engine
from storefront.api.routers import health, sessions, products, cart, checkout, orders, seller
from storefront.services.notification_service import NotificationService
from storefront.services.session_service import SessionRegistry
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables created")


def create_app(registry: SessionRegistry | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    # sesje klientow (koszyk + checkout) zyja w pamieci procesu
    app.state.sessions = registry if registry is not None else SessionRegistry(notifier=NotificationService())

    app.include_router(health.router)
    app.include_router(sessions.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)
    app.include_router(seller.router)

    return app


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
