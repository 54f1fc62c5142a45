# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for data validation
# - services/: Resource services (CRUD, ownership checks, pagination)
#
# Services receive a SQLAlchemy session and raise the typed errors from
# app/exceptions.py; they never build HTTP responses themselves.
# =============================================================================
