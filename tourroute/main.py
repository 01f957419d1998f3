"""FastAPI application factory"""
import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from .api.routes import health, route
from .config import HOST, LOG_LEVEL, PORT


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Tour Route Constructor API",
        description="API para ordenar los puntos de una ruta turística",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(route.router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Redirect to Swagger documentation"""
        return RedirectResponse(url="/docs")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
