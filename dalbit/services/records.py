"""
Service module for period record lifecycle.

Periods are never hard-deleted. Removing one sets ``deleted_at`` and every
active query skips it; restoring clears the marker again. Models are treated
as values, so each operation returns a new Period.
"""
from typing import Optional
from datetime import datetime, timezone

from aws_lambda_powertools import Logger

from dalbit.models.period import Period

logger = Logger()

def soft_delete_period(period: Period, now: Optional[datetime] = None) -> Period:
    """
    Mark a period as deleted.

    Args:
        period: Period to delete
        now: Deletion timestamp, defaults to the current UTC time

    Returns:
        Copy of the period with ``deleted_at`` set
    """
    deleted_at = now or datetime.now(timezone.utc)
    logger.info("Soft-deleting period", extra={
        "period_id": period.id,
        "start_date": str(period.start_date)
    })
    return period.model_copy(update={"deleted_at": deleted_at, "updated_at": deleted_at})

def restore_period(period: Period, now: Optional[datetime] = None) -> Period:
    """Clear the deletion marker of a period."""
    logger.info("Restoring period", extra={
        "period_id": period.id,
        "start_date": str(period.start_date)
    })
    return period.model_copy(update={
        "deleted_at": None,
        "updated_at": now or datetime.now(timezone.utc)
    })
