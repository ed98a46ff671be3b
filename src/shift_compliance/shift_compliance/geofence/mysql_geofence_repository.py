from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import GeofenceZone, GeoPoint
from .repository import GeofenceRepository


class MySQLGeofenceRepository(GeofenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: int) -> Sequence[GeofenceZone]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT g.zone_id, g.name, g.latitude, g.longitude, g.radius_meters, g.is_active
                FROM geofences g
                LEFT JOIN geofence_employees ge ON ge.zone_id = g.zone_id
                WHERE g.is_active = 1
                  AND (g.applies_to_all = 1 OR ge.employee_id = %s)
                GROUP BY g.zone_id, g.name, g.latitude, g.longitude, g.radius_meters, g.is_active
                ORDER BY g.zone_id
                """,
                (int(employee_id),),
            )
            rows = fetchall(cur)
            return [
                GeofenceZone(
                    zone_id=int(r["zone_id"]),
                    name=r["name"],
                    center=GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
                    radius_meters=float(r["radius_meters"]),
                    is_active=bool(r["is_active"]),
                )
                for r in rows
            ]
