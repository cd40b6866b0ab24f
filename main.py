# main.py
import os
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from paths import ENV_FILE
from database import init_db, seed_db, seed_demo_data_enabled
from Services.errors import BookingError, FailureKind
from Services.account_router import router as account_router
from Services.car_router import router as car_router
from Services.driver_router import router as driver_router
from Services.trip_router import router as trip_router

# Load environment variables
load_dotenv(ENV_FILE)

# Configure logging
logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO').upper())
logger = logging.getLogger(__name__)

# HTTP status for each booking failure
STATUS_BY_KIND = {
    FailureKind.DUPLICATE_USERNAME: status.HTTP_409_CONFLICT,
    FailureKind.DUPLICATE_CAR_ID: status.HTTP_409_CONFLICT,
    FailureKind.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    FailureKind.INVALID_ROUTE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    FailureKind.INVALID_POSITION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    FailureKind.NO_CARS_AVAILABLE: status.HTTP_409_CONFLICT,
    FailureKind.CAR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.CAR_UNAVAILABLE: status.HTTP_409_CONFLICT,
    FailureKind.DRIVER_UNASSIGNED: status.HTTP_409_CONFLICT,
    FailureKind.TRIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.ALREADY_COMPLETED: status.HTTP_409_CONFLICT,
}

# Create FastAPI app
app = FastAPI(
    title="ConsoleCab API",
    description="""
    Cab booking service:
    - Customer registration and login
    - Car search by distance to the pickup point
    - Trip booking and completion
    - Fleet management for owners (cars and drivers)
    """,
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content={"detail": exc.message, "type": exc.kind.value}
    )

# Exception handler for detailed error messages
@app.exception_handler(Exception)
async def debug_exception_handler(request: Request, exc: Exception):
    logger.error(f"Error processing request: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )

# Include routers
app.include_router(
    account_router,
    prefix="/api/accounts",
    tags=["accounts"]
)

app.include_router(
    car_router,
    prefix="/api/cars",
    tags=["cars"]
)

app.include_router(
    driver_router,
    prefix="/api/drivers",
    tags=["drivers"]
)

app.include_router(
    trip_router,
    prefix="/api/trips",
    tags=["trips"]
)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    logger.info("Initializing database...")
    try:
        init_db()
        if seed_demo_data_enabled():
            seed_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        raise

@app.get("/")
async def root():
    return {
        "message": "Welcome to ConsoleCab API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
