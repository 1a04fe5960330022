"""
repositories/car_repo.py
------------------------
Data access layer for cars.
All SQL queries touching the `cars` and `cars_drivers` tables live here.

Every statement group runs on its own pooled connection and commits on its
own: create() and update() write the car row first and the driver
assignments afterwards, so a failure in the second step leaves the car row
in place without its drivers.
"""

from typing import Optional

import psycopg2
from psycopg2 import extras

from db.connection import get_connection, release_connection, rollback
from db.exceptions import DataAccessError
from models.car import Car
from models.driver import Driver
from models.manufacturer import Manufacturer
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_CARS = """
    SELECT c.id, c.model, m.id AS m_id, m.name AS m_name, m.country AS m_country
    FROM cars c
    INNER JOIN manufacturers m ON c.manufacturer_id = m.id
"""


class CarRepository:
    """Repository for CRUD operations on cars and their driver assignments."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, car: Car) -> Car:
        """
        Insert a new car and attach its current drivers.

        Args:
            car: The Car to persist; `car.manufacturer.id` must be set.

        Returns:
            The same Car with its `id` populated.

        Raises:
            DataAccessError: If the car insert or any driver assignment fails.
        """
        sql = "INSERT INTO cars (model, manufacturer_id) VALUES (%s, %s) RETURNING id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (car.model, car.manufacturer.id))
                car.id = cur.fetchone()[0]
            conn.commit()
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to create car '{car.model}': {e}")
            raise DataAccessError(f"Couldn't create {car}.", e) from e
        finally:
            release_connection(conn)

        self._insert_drivers(car)
        logger.info(f"Created car #{car.id} with {len(car.drivers)} driver(s)")
        return car

    # ── READ ──────────────────────────────────────────────

    def get(self, car_id: int) -> Optional[Car]:
        """
        Fetch a single non-deleted car with its manufacturer and drivers.

        Returns:
            A Car, or None if no active car has this id.
        """
        sql = _SELECT_CARS + " WHERE c.id = %s AND c.is_deleted = FALSE;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (car_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Failed to get car #{car_id}: {e}")
            raise DataAccessError(f"Couldn't get car by id {car_id}.", e) from e
        finally:
            release_connection(conn)

        if row is None:
            return None
        car = self._row_to_car(row)
        self._load_drivers([car])
        return car

    def get_all(self) -> list[Car]:
        """
        Fetch every non-deleted car with its manufacturer and drivers.
        No ordering is applied.
        """
        sql = _SELECT_CARS + " WHERE c.is_deleted = FALSE;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                cars = [self._row_to_car(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to get all cars: {e}")
            raise DataAccessError("Couldn't get all cars.", e) from e
        finally:
            release_connection(conn)

        self._load_drivers(cars)
        return cars

    def get_all_by_driver(self, driver_id: int) -> list[Car]:
        """
        Fetch every non-deleted car the driver is currently assigned to.

        Each car comes back with its full list of (non-deleted) drivers,
        not only the one that was searched for.
        """
        sql = _SELECT_CARS + """
            INNER JOIN cars_drivers cd ON cd.car_id = c.id
            WHERE c.is_deleted = FALSE AND cd.driver_id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (driver_id,))
                cars = [self._row_to_car(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to get cars of driver #{driver_id}: {e}")
            raise DataAccessError(f"Couldn't get cars by driver id {driver_id}.", e) from e
        finally:
            release_connection(conn)

        self._load_drivers(cars)
        return cars

    # ── UPDATE ────────────────────────────────────────────

    def update(self, car: Car) -> Car:
        """
        Overwrite model and manufacturer of an active car, then replace
        its driver assignments with `car.drivers`.

        Updating a deleted or missing car changes no car row; the driver
        assignments are replaced regardless.

        Returns:
            The input Car.
        """
        sql = """
            UPDATE cars
            SET model = %s, manufacturer_id = %s
            WHERE id = %s AND is_deleted = FALSE;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (car.model, car.manufacturer.id, car.id))
                updated = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to update car #{car.id}: {e}")
            raise DataAccessError(f"Couldn't update {car}.", e) from e
        finally:
            release_connection(conn)

        self._delete_drivers(car.id)
        self._insert_drivers(car)
        if updated:
            logger.info(f"Updated car #{car.id}")
        else:
            logger.debug(f"No active car #{car.id} to update")
        return car

    # ── DELETE ────────────────────────────────────────────

    def delete(self, car_id: int) -> bool:
        """
        Soft-delete a car. Driver assignments are left in place.

        Returns:
            True if an active car was marked deleted, False otherwise.
        """
        sql = "UPDATE cars SET is_deleted = TRUE WHERE id = %s AND is_deleted = FALSE;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (car_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted car #{car_id}")
            return deleted
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to delete car #{car_id}: {e}")
            raise DataAccessError(f"Couldn't delete car with id {car_id}.", e) from e
        finally:
            release_connection(conn)

    # ── DRIVER ASSIGNMENTS ────────────────────────────────

    def _load_drivers(self, cars: list[Car]) -> None:
        """Set `drivers` on each car from cars_drivers, skipping deleted drivers."""
        if not cars:
            return
        sql = """
            SELECT cd.car_id, d.id, d.name, d.license_number
            FROM cars_drivers cd
            INNER JOIN drivers d ON cd.driver_id = d.id
            WHERE cd.car_id = ANY(%s) AND d.is_deleted = FALSE;
        """
        car_ids = [car.id for car in cars]
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (car_ids,))
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Failed to load drivers for cars {car_ids}: {e}")
            raise DataAccessError(f"Couldn't get drivers by car ids {car_ids}.", e) from e
        finally:
            release_connection(conn)

        by_car: dict[int, list[Driver]] = {}
        for row in rows:
            by_car.setdefault(row["car_id"], []).append(self._row_to_driver(row))
        for car in cars:
            car.drivers = by_car.get(car.id, [])

    def _insert_drivers(self, car: Car) -> None:
        """Insert one cars_drivers row per distinct driver of the car."""
        driver_ids = list(dict.fromkeys(driver.id for driver in car.drivers))
        if not driver_ids:
            return
        sql = "INSERT INTO cars_drivers (car_id, driver_id) VALUES (%s, %s);"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                for driver_id in driver_ids:
                    cur.execute(sql, (car.id, driver_id))
            conn.commit()
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to assign drivers {driver_ids} to car #{car.id}: {e}")
            raise DataAccessError(f"Couldn't insert drivers for {car}.", e) from e
        finally:
            release_connection(conn)

    def _delete_drivers(self, car_id: int) -> None:
        """Remove every cars_drivers row of the car."""
        sql = "DELETE FROM cars_drivers WHERE car_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (car_id,))
            conn.commit()
        except psycopg2.Error as e:
            rollback(conn)
            logger.error(f"Failed to clear drivers of car #{car_id}: {e}")
            raise DataAccessError(
                f"Couldn't delete drivers from cars_drivers with car id {car_id}.", e
            ) from e
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_car(row: dict) -> Car:
        """Convert a joined cars/manufacturers row to a Car (drivers not loaded)."""
        manufacturer = Manufacturer(
            id=row["m_id"],
            name=row["m_name"],
            country=row["m_country"],
        )
        return Car(id=row["id"], model=row["model"], manufacturer=manufacturer)

    @staticmethod
    def _row_to_driver(row: dict) -> Driver:
        """Convert a drivers row to a Driver domain object."""
        return Driver(
            id=row["id"],
            name=row["name"],
            license_number=row["license_number"],
        )
