import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import routes
from routes import auth, billing, kitchen, menu_management, notifications, order_management, reservations, table_management, waiters

from services.core import RestaurantCore
from services.exceptions import RestaurantError
from utils import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def restaurant_error_handler(request: Request, exc: RestaurantError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(core: Optional[RestaurantCore] = None) -> FastAPI:
    if core is None:
        core = RestaurantCore()
        if config.SEED_ON_STARTUP:
            core.reset(seed=True)

    # Create FastAPI app
    app = FastAPI(
        title="Restaurant Operations API",
        description="Tables, reservations, orders and billing for a single restaurant",
        version="1.0.0",
        openapi_tags=[
            {"name": "menu", "description": "Menu catalog"},
            {"name": "tables", "description": "Table lifecycle"},
            {"name": "reservations", "description": "Reservation booking and conflicts"},
            {"name": "orders", "description": "Order lifecycle"},
            {"name": "kitchen", "description": "Kitchen display actions"},
            {"name": "billing", "description": "Bills, payments and receipts"},
        ],
    )
    app.state.core = core

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RestaurantError, restaurant_error_handler)

    # Include routers
    app.include_router(menu_management.router)
    app.include_router(table_management.router)
    app.include_router(reservations.router)
    app.include_router(order_management.router)
    app.include_router(kitchen.router)
    app.include_router(billing.router)
    app.include_router(auth.router)
    app.include_router(waiters.router)
    app.include_router(notifications.router)

    # Root endpoint
    @app.get("/")
    async def root():
        return {"message": "Welcome to Restaurant Operations API"}

    return app


# Main run block
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
