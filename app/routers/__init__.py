# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - users.py: User profiles and administration
# - articles.py: Public articles, ADMIN-managed
# - diaries.py: Private diary entries
# - meals.py: Meal log
# - exercise_records.py: Workout log
# - body_measurements.py: Body measurements, recent window, trends
#
# Each router is mounted in main.py with a URL prefix.
# Authentication routes live in app/auth/routes.py.
# =============================================================================

from . import health
from . import users
from . import articles
from . import diaries
from . import meals
from . import exercise_records
from . import body_measurements

__all__ = [
    "health",
    "users",
    "articles",
    "diaries",
    "meals",
    "exercise_records",
    "body_measurements",
]
