"""
repositories/driver_repo.py
---------------------------
Data access layer for drivers.
Drivers are soft-deleted: the row stays, `is_deleted` hides it from every read.
"""

from typing import Optional

import psycopg2
from psycopg2 import extras

from db.connection import get_connection, release_connection, rollback
from db.exceptions import DataAccessError
from models.driver import Driver
from utils.logger import get_logger

logger = get_logger(__name__)


class DriverRepository:
    """Repository for CRUD operations on the drivers table."""

    def create(self, driver: Driver) -> Driver:
        """
        Insert a new driver.

        Returns:
            The same Driver with its `id` populated.
        """
        sql = "INSERT INTO drivers (name, license_number) VALUES (%s, %s) RETURNING id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (driver.name, driver.license_number))
                driver.id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Created driver #{driver.id}")
            return driver
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to create driver '{driver.name}': {e}")
            raise DataAccessError(f"Couldn't create driver {driver}.", e) from e
        finally:
            release_connection(conn)

    def get(self, driver_id: int) -> Optional[Driver]:
        """Fetch a non-deleted driver by ID, or None."""
        sql = """
            SELECT id, name, license_number
            FROM drivers
            WHERE id = %s AND is_deleted = FALSE;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (driver_id,))
                row = cur.fetchone()
                return self._row_to_driver(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to get driver #{driver_id}: {e}")
            raise DataAccessError(f"Couldn't get driver by id {driver_id}.", e) from e
        finally:
            release_connection(conn)

    def get_all(self) -> list[Driver]:
        """Fetch all non-deleted drivers ordered by id."""
        sql = """
            SELECT id, name, license_number
            FROM drivers
            WHERE is_deleted = FALSE
            ORDER BY id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                return [self._row_to_driver(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to get all drivers: {e}")
            raise DataAccessError("Couldn't get all drivers.", e) from e
        finally:
            release_connection(conn)

    def update(self, driver: Driver) -> bool:
        """
        Update name and license number of a non-deleted driver.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE drivers
            SET name = %s, license_number = %s
            WHERE id = %s AND is_deleted = FALSE;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (driver.name, driver.license_number, driver.id))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to update driver #{driver.id}: {e}")
            raise DataAccessError(f"Couldn't update driver {driver}.", e) from e
        finally:
            release_connection(conn)

    def delete(self, driver_id: int) -> bool:
        """
        Soft-delete a driver. Existing car assignments stay in cars_drivers
        but are no longer visible through car reads.

        Returns:
            True if an active driver was marked deleted, False otherwise.
        """
        sql = "UPDATE drivers SET is_deleted = TRUE WHERE id = %s AND is_deleted = FALSE;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (driver_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted driver #{driver_id}")
            return deleted
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to delete driver #{driver_id}: {e}")
            raise DataAccessError(f"Couldn't delete driver with id {driver_id}.", e) from e
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_driver(row: dict) -> Driver:
        return Driver(
            id=row["id"],
            name=row["name"],
            license_number=row["license_number"],
        )
