# backend/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import init_db
from storage import ConnectivityFailure, ConstraintViolation, InsufficientStock

# Import routerów
from routes.auth import router as auth_router
from routes.categories import router as categories_router
from routes.products import router as products_router
from routes.cart import router as cart_router
from routes.orders import router as orders_router
from routes.stats import router as stats_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)

    origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Storage failures mapped to client responses
    @app.exception_handler(ConstraintViolation)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": "Resource already exists or is still referenced"})

    @app.exception_handler(InsufficientStock)
    async def insufficient_stock_handler(request: Request, exc: InsufficientStock):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Insufficient stock", "product_id": exc.product_id},
        )

    @app.exception_handler(ConnectivityFailure)
    async def connectivity_failure_handler(request: Request, exc: ConnectivityFailure):
        logger.error("Database unavailable for %s", request.url.path)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": "Database unavailable"})

    # Rejestracja routerów
    app.include_router(auth_router)
    app.include_router(categories_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(stats_router)

    @app.get("/")
    def read_root():
        return {"message": "Storefront API działa!"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
