"""
repositories/manufacturer_repo.py
---------------------------------
Data access layer for manufacturers.
"""

from typing import Optional

import psycopg2
from psycopg2 import extras

from db.connection import get_connection, release_connection, rollback
from db.exceptions import DataAccessError
from models.manufacturer import Manufacturer
from utils.logger import get_logger

logger = get_logger(__name__)


class ManufacturerRepository:
    """Repository for CRUD operations on the manufacturers table."""

    def create(self, manufacturer: Manufacturer) -> Manufacturer:
        """Insert a manufacturer and populate its `id`."""
        sql = "INSERT INTO manufacturers (name, country) VALUES (%s, %s) RETURNING id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (manufacturer.name, manufacturer.country))
                manufacturer.id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Created manufacturer #{manufacturer.id}")
            return manufacturer
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to create manufacturer '{manufacturer.name}': {e}")
            raise DataAccessError(f"Couldn't create manufacturer {manufacturer}.", e) from e
        finally:
            release_connection(conn)

    def get(self, manufacturer_id: int) -> Optional[Manufacturer]:
        sql = "SELECT id, name, country FROM manufacturers WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (manufacturer_id,))
                row = cur.fetchone()
                return self._row_to_manufacturer(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to get manufacturer #{manufacturer_id}: {e}")
            raise DataAccessError(
                f"Couldn't get manufacturer by id {manufacturer_id}.", e
            ) from e
        finally:
            release_connection(conn)

    def get_all(self) -> list[Manufacturer]:
        sql = "SELECT id, name, country FROM manufacturers ORDER BY id;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                return [self._row_to_manufacturer(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to get all manufacturers: {e}")
            raise DataAccessError("Couldn't get all manufacturers.", e) from e
        finally:
            release_connection(conn)

    def update(self, manufacturer: Manufacturer) -> bool:
        """Overwrite name and country; True if the row exists."""
        sql = "UPDATE manufacturers SET name = %s, country = %s WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (manufacturer.name, manufacturer.country, manufacturer.id))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to update manufacturer #{manufacturer.id}: {e}")
            raise DataAccessError(f"Couldn't update manufacturer {manufacturer}.", e) from e
        finally:
            release_connection(conn)

    def delete(self, manufacturer_id: int) -> bool:
        """
        Delete a manufacturer row.

        The table has no soft-delete flag, so this removes the row; it fails
        with DataAccessError while any car still references the manufacturer.
        """
        sql = "DELETE FROM manufacturers WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (manufacturer_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted manufacturer #{manufacturer_id}")
            return deleted
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to delete manufacturer #{manufacturer_id}: {e}")
            raise DataAccessError(
                f"Couldn't delete manufacturer with id {manufacturer_id}.", e
            ) from e
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_manufacturer(row: dict) -> Manufacturer:
        return Manufacturer(id=row["id"], name=row["name"], country=row["country"])
