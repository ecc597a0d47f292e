"""Clear the `pin_reset_required` flag for a single athlete.

A forced PIN reset left Edwin Escobar unable to log in with the seeded PIN.
This fix sets the flag back to false on that `athletes` row and reports
whether the row was cleared, missing, or the run failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import psycopg

from .db import ConnectFn, execute, open_connection
from .errors import AmbiguousAthleteError, MaintenanceError
from .settings import Settings

log = logging.getLogger(__name__)

TARGET_ATHLETE_NAME = "Edwin Escobar"

CLEAR_PIN_RESET_SQL = """
    UPDATE athletes
    SET pin_reset_required = false
    WHERE name = %s
"""


class FixStatus(str, Enum):
    CLEARED = "cleared"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class FixOutcome:
    status: FixStatus
    athlete_name: str
    affected: int = 0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not FixStatus.ERROR


def clear_pin_reset_flag(conn: Any, athlete_name: str, *, log_sql: bool = False) -> int:
    """Run the UPDATE and return the number of affected rows.

    Raises AmbiguousAthleteError when more than one row matched, so the
    surrounding transaction is rolled back instead of committed.
    """

    with conn.cursor() as cur:
        execute(cur, CLEAR_PIN_RESET_SQL, (athlete_name,), log_sql=log_sql)
        affected = max(0, int(cur.rowcount or 0))

    if affected > 1:
        raise AmbiguousAthleteError(athlete_name, affected)
    return affected


class MaintenanceRunner:
    """Runs the PIN reset fix once against the configured database."""

    def __init__(
        self,
        settings: Settings,
        *,
        connect: ConnectFn | None = None,
        athlete_name: str = TARGET_ATHLETE_NAME,
    ):
        self.settings = settings
        self.athlete_name = athlete_name
        self._connect = connect

    def run(self) -> FixOutcome:
        name = self.athlete_name
        try:
            with open_connection(self.settings, connect=self._connect) as conn:
                affected = clear_pin_reset_flag(conn, name, log_sql=self.settings.DB_LOG_SQL)
        except (psycopg.Error, MaintenanceError) as e:
            log.exception("Clearing PIN reset flag for %s failed", name)
            return FixOutcome(status=FixStatus.ERROR, athlete_name=name, detail=f"{type(e).__name__}: {e}")

        if affected == 0:
            log.warning("No rows updated - %s not found", name)
            return FixOutcome(status=FixStatus.NOT_FOUND, athlete_name=name)

        log.info("Cleared pin_reset_required for %s (rows=%d)", name, affected)
        return FixOutcome(status=FixStatus.CLEARED, athlete_name=name, affected=affected)
