"""
Main FastAPI application for the REA GraphQL gateway
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..deployment import DeploymentConfig, load_deployment_config
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..rpc import HttpTransport, RemoteCallBinder, RemoteCallTransport

# Configure logging before creating logger
configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    deployment: DeploymentConfig = app.state.deployment
    logger.info(
        "Starting REA GraphQL API...",
        conductor_uri=deployment.conductor_uri,
        modules=sorted(capability.value for capability in deployment.capabilities),
    )

    yield

    # Shutdown
    logger.info("Shutting down REA GraphQL API...")
    await app.state.transport.aclose()


def create_app(
    deployment: DeploymentConfig | None = None,
    transport: RemoteCallTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        deployment: Deployment configuration (loaded from settings when omitted)
        transport: Remote call transport (an HTTP transport to the configured
            conductor when omitted)
    """
    if deployment is None:
        deployment = load_deployment_config()
    if transport is None:
        transport = HttpTransport(deployment.conductor_uri, timeout=deployment.rpc_timeout)

    app = FastAPI(
        title="REA GraphQL API",
        description="ValueFlows GraphQL gateway over capability-modular REA backend cells",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.deployment = deployment
    app.state.transport = transport

    # Add logging context middleware
    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "modules": sorted(capability.value for capability in deployment.capabilities),
        }

    try:
        from ..graphql.schema import build_schema, create_graphql_router, validate_schema

        binder = RemoteCallBinder(deployment, transport)
        schema = build_schema(deployment.capabilities, binder)

        # Validate schema at startup so a broken deployment fails fast
        logger.info("Validating GraphQL schema...")
        validate_schema(schema)

        app.state.schema = schema
        app.include_router(create_graphql_router(schema), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Re-raise to fail fast - server should not start with broken GraphQL
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rea_graphql.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
