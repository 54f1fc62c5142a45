# =============================================================================
# core/services/body_measurement_service.py - Body Measurement Operations
# =============================================================================
# Measurements are owner-only. Besides plain CRUD this service maintains the
# user's bounded recent window (lib/recent_window.py) and computes period
# averages for the trend endpoint.
#
# Measurement dates are stored in UTC, so the window, the aggregates and the
# date filters all bucket the same instant the same way.
#
# Creating a measurement is one unit of work: the row insert and the owner's
# window update commit together or not at all. The window update is
# read-modify-write without locking; concurrent creates for the same user may
# lose a window entry (last write wins). The measurement rows themselves are
# never lost.
# =============================================================================

import logging
from collections import OrderedDict
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel
from sqlalchemy import select

from app.auth.models import Identity
from app.exceptions import BadRequestError, NotFoundError
from core.models.body_measurement import MeasurementAggregate
from core.models.enums import AggregationPeriod
from core.services.base import ResourceService
from lib.recent_window import RecentMeasurement, RecentMeasurementWindow, as_utc
from lib.tables import BodyMeasurement, User

logger = logging.getLogger(__name__)


def period_key(moment: datetime, period: AggregationPeriod) -> str:
    """
    Bucket key for a measurement date.

    Example:
        period_key(datetime(2024, 2, 10), AggregationPeriod.WEEK)   # "2024-W06"
        period_key(datetime(2024, 2, 10), AggregationPeriod.MONTH)  # "2024-02"
        period_key(datetime(2024, 2, 10), AggregationPeriod.YEAR)   # "2024"
    """
    if period is AggregationPeriod.WEEK:
        iso_year, iso_week, _ = moment.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if period is AggregationPeriod.MONTH:
        return f"{moment.year}-{moment.month:02d}"
    return f"{moment.year}"


class BodyMeasurementService(ResourceService[BodyMeasurement]):
    model = BodyMeasurement
    label = "Body measurement"
    date_field = "measurement_date"
    writable_fields = frozenset({"measurement_date", "weight_kg", "body_fat_percentage"})

    def create(self, data: BaseModel, owner: Optional[Identity] = None) -> BodyMeasurement:
        """
        Persist the measurement and push its summary into the owner's
        recent window, in a single commit.

        Raises:
            BadRequestError: The owner no longer exists
        """
        row = self._build(data, owner)

        user = self.session.get(User, row.user_id)
        if user is None:
            raise BadRequestError("User not found")

        self.session.add(row)
        window = RecentMeasurementWindow.from_json(user.recent_body_measurements)
        window.append(row.measurement_date, row.weight_kg, row.body_fat_percentage)
        user.recent_body_measurements = window.to_json()
        self._commit("creating")

        logger.info(f"Created {self.label} {row.id}")
        logger.debug(f"Recent window for user {user.id} now holds {len(window)} entries")
        return row

    def recent(self, requester: Identity) -> list[RecentMeasurement]:
        """The requester's cached recent window, oldest first."""
        user = self.session.get(User, requester.id)
        if user is None:
            raise NotFoundError("User not found")
        return RecentMeasurementWindow.from_json(user.recent_body_measurements).entries

    def aggregate(
        self,
        requester: Identity,
        period: AggregationPeriod = AggregationPeriod.MONTH,
        target_date: Optional[datetime] = None,
    ) -> list[MeasurementAggregate]:
        """
        Average weight and body fat per week, month or year.

        Args:
            requester: Only this user's measurements are aggregated
            period: Bucket size, computed on UTC dates
            target_date: Ignore measurements taken after this moment

        Returns:
            One MeasurementAggregate per bucket, oldest bucket first
        """
        stmt = select(BodyMeasurement).where(BodyMeasurement.user_id == requester.id)
        if target_date is not None:
            stmt = stmt.where(BodyMeasurement.measurement_date <= as_utc(target_date))
        stmt = stmt.order_by(BodyMeasurement.measurement_date.asc())

        buckets: OrderedDict[str, list[BodyMeasurement]] = OrderedDict()
        for row in self.session.scalars(stmt):
            buckets.setdefault(period_key(as_utc(row.measurement_date), period), []).append(row)

        return [
            MeasurementAggregate(
                date=key,
                average_weight_kg=round(sum(r.weight_kg for r in rows) / len(rows), 2),
                average_body_fat_percentage=round(sum(r.body_fat_percentage for r in rows) / len(rows), 2),
                count=len(rows),
            )
            for key, rows in buckets.items()
        ]

    def _writable(self, values: dict[str, Any]) -> dict[str, Any]:
        values = super()._writable(values)
        if values.get("measurement_date") is not None:
            values["measurement_date"] = as_utc(values["measurement_date"])
        return values
