from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Facility
from .repository import FacilityRepository


class MySQLFacilityRepository(FacilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, facility_id: int) -> Optional[Facility]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT facility_id, name, code, timezone FROM facilities WHERE facility_id=%s",
                (int(facility_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Facility(
                facility_id=int(r["facility_id"]),
                name=r["name"],
                code=r["code"],
                timezone=r.get("timezone"),
            )
