from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
import logging
import time
from contextlib import asynccontextmanager

from config import get_config
from routes.jobs import router as jobs_router
from storage.store_factory import StoreFactory
from utils.auth import BearerTokenAuthorizer
from utils.errors import ApiError, ErrorKind

config = get_config()

# Configure logging
logging.basicConfig(
    level=config["LOG_LEVEL"],
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


# Startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Initialize resources
    logging.info("Starting application and initializing resources...")
    settings = get_config()
    app.state.store = StoreFactory.create_store(settings)
    app.state.authorizer = BearerTokenAuthorizer(settings["ADMIN_API_KEY"])
    await StoreFactory.seed_store(app.state.store, settings["SEED_DATA_PATH"])
    logging.info("Application startup complete")

    yield

    # Shutdown: Clean up resources
    logging.info("Shutting down application...")
    await app.state.store.close()
    logging.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Build the API; every failure is answered by the handlers registered here"""
    app = FastAPI(
        title="Jobs API",
        description="Create, search, update and delete job postings",
        version="1.0.0",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_config()["CORS_ORIGINS"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(jobs_router)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.kind is ErrorKind.NOT_FOUND:
            logging.warning(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"message": exc.detail, "status": exc.status_code}},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logging.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
        error = ApiError()
        return JSONResponse(status_code=error.status_code, content=error.to_envelope())

    @app.get("/")
    async def root():
        """Root endpoint - returns API welcome message"""
        return {"message": "Welcome to the Jobs API! Go to /docs for API documentation."}

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        return {
            "status": "OK",
            "time": time.time(),
            "store": request.app.state.store.name,
        }

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host=config["HOST"], port=config["PORT"], reload=True)
