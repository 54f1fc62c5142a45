# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - database.py: Store handle (engine, sessions, startup retry) and
#   store error classification
# - tables.py: SQLAlchemy ORM tables
# - recent_window.py: Bounded, date-sorted recent-measurement window
# - utils.py: LIKE escaping for search terms
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import (
    Database,
    DatabaseUnavailableError,
    StoreErrorKind,
    classify_store_error,
)
from lib.recent_window import RecentMeasurement, RecentMeasurementWindow
from lib.utils import LIKE_ESCAPE, contains_pattern, escape_like

__all__ = [
    # Database
    "Database",
    "DatabaseUnavailableError",
    "StoreErrorKind",
    "classify_store_error",
    # Recent window
    "RecentMeasurement",
    "RecentMeasurementWindow",
    # Utils
    "contains_pattern",
    "escape_like",
    "LIKE_ESCAPE",
]
