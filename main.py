"""
main.py
-------
Entry point for the taxi service data layer.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Run a short walkthrough of the car operations.
    - Close the pool on exit.
"""

from db.connection import close_pool, init_pool
from db.init_db import create_tables
from models.car import Car
from models.driver import Driver
from models.manufacturer import Manufacturer
from repositories.driver_repo import DriverRepository
from repositories.manufacturer_repo import ManufacturerRepository
from services.car_service import CarService
from utils.logger import get_logger

logger = get_logger(__name__)


def run_demo() -> None:
    """Create a car, reassign its drivers, then soft-delete it."""
    manufacturers = ManufacturerRepository()
    drivers = DriverRepository()
    cars = CarService()

    tesla = manufacturers.create(Manufacturer(name="Tesla", country="USA"))
    alice = drivers.create(Driver(name="Alice", license_number="AB123456"))
    bob = drivers.create(Driver(name="Bob", license_number="CD654321"))

    car = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=[alice]))
    logger.info(f"Created: {cars.get(car.id)}")

    cars.add_driver_to_car(bob, car)
    cars.remove_driver_from_car(alice, car)
    logger.info(f"Cars driven by {bob}: {[str(c) for c in cars.get_all_by_driver(bob.id)]}")
    logger.info(f"Cars driven by {alice}: {[str(c) for c in cars.get_all_by_driver(alice.id)]}")

    cars.delete(car.id)
    logger.info(f"After delete: get({car.id}) -> {cars.get(car.id)}")


def main() -> None:
    """Initialize the database and run the walkthrough."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    try:
        create_tables()

        # ── 2. Walkthrough ────────────────────────────────
        run_demo()
    finally:
        # ── 3. Cleanup ────────────────────────────────────
        close_pool()


if __name__ == "__main__":
    main()
