# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the HealthTrack API:
# - test_models.py, test_pagination.py: Schema validation and page clamping
# - test_security.py, test_authorization.py: Passwords, tokens, role checks
# - test_recent_window.py, test_database.py: lib/ building blocks
# - test_services.py: Business rules without HTTP
# - test_exceptions.py: Error envelopes and store error translation
# - test_api_auth.py, test_api_resources.py: Endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
