"""
Global exception handler for the Identity Web service.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .exceptions import (
    DuplicateIdentityException,
    IdentityStoreException,
    RegistrationException
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    
    @app.exception_handler(DuplicateIdentityException)
    async def handle_duplicate_identity(request: Request, exc: DuplicateIdentityException):
        return JSONResponse(
            status_code=409,
            content={
                "view": "identity/registration",
                "error": "Registration Failed",
                "message": "That username is already registered"
            }
        )
    
    @app.exception_handler(RegistrationException)
    async def handle_registration_error(request: Request, exc: RegistrationException):
        logger.error("Registration failed: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Registration Failed", "message": "The identity could not be registered"}
        )
    
    @app.exception_handler(IdentityStoreException)
    async def handle_identity_store_error(request: Request, exc: IdentityStoreException):
        logger.error("Identity store error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Database Error", "message": exc.message}
        )
    
    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
        )
