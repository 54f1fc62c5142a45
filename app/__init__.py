# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan, middleware and error handler setup
# - config.py: Environment variable loading and settings
# - exceptions.py: Error hierarchy and exception handlers
# - responses.py: Success envelope helpers
# - middleware.py: Request logging, rate limiting, security headers
# - auth/: Password hashing, tokens, authorization dependencies, auth routes
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
