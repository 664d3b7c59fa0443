from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from threadcart.core.config import settings
from threadcart.core.database import connect_to_mongo, close_mongo_connection, get_database
from threadcart.core.error_handlers import setup_error_handlers
from threadcart.repositories.carts import CartStore
from threadcart.repositories.orders import OrderStore
from threadcart.repositories.users import UserStore
from threadcart.api.routes import auth, cart, orders, products

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for ThreadCart - apparel catalog, shopping cart and orders",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)


# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    logger.info("Starting up ThreadCart backend...")
    await connect_to_mongo()
    db = get_database()
    await CartStore(db).ensure_indexes()
    await UserStore(db).ensure_indexes()
    await OrderStore(db).ensure_indexes()
    logger.info("ThreadCart backend started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up services on shutdown."""
    logger.info("Shutting down ThreadCart backend...")
    await close_mongo_connection()
    logger.info("ThreadCart backend shut down successfully")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "threadcart-backend",
        "version": "1.0.0"
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "description": "ThreadCart Backend API",
        "docs": "/docs",
        "health": "/health"
    }


# Include routers
app.include_router(cart.router, prefix=f"{settings.API_V1_PREFIX}/cart", tags=["Cart"])
app.include_router(products.router, prefix=f"{settings.API_V1_PREFIX}/product", tags=["Products"])
app.include_router(orders.router, prefix=f"{settings.API_V1_PREFIX}/order", tags=["Orders"])
app.include_router(auth.router, prefix=f"{settings.API_V1_PREFIX}/auth", tags=["Authentication"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
