"""
Main FastAPI application entry point.
Configures and initializes the Identity Web service.
"""
import logging
from fastapi import FastAPI, Request
from mangum import Mangum
from identity_web.core.config import settings
from identity_web.core.exception_handler import register_exception_handlers
from identity_web.api.routes import health_routes, identity_routes

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Login, registration and logout pages backed by a pluggable security context"
)

# Register exception handlers
register_exception_handlers(app)

# Register routes
app.include_router(health_routes.router)
app.include_router(identity_routes.router)

# Middleware to log request paths
@app.middleware("http")
async def log_request(request: Request, call_next):
    logger.debug("Request path: %s", request.url.path)
    response = await call_next(request)
    return response

# Lambda handler for AWS
handler = Mangum(app, lifespan="off")


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
