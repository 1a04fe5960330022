"""
services/car_service.py
-----------------------
Business logic for cars and their driver assignments.
"""

from typing import Optional

from models.car import Car
from models.driver import Driver
from repositories.car_repo import CarRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class CarService:
    """
    Handles car operations on top of CarRepository.

    Responsibilities:
        - Delegate CRUD calls to the repository.
        - Attach and detach drivers, persisting the new assignment set.
    """

    def __init__(self, repo: Optional[CarRepository] = None):
        self.repo = repo or CarRepository()

    def create(self, car: Car) -> Car:
        return self.repo.create(car)

    def get(self, car_id: int) -> Optional[Car]:
        return self.repo.get(car_id)

    def get_all(self) -> list[Car]:
        return self.repo.get_all()

    def update(self, car: Car) -> Car:
        return self.repo.update(car)

    def delete(self, car_id: int) -> bool:
        return self.repo.delete(car_id)

    def get_all_by_driver(self, driver_id: int) -> list[Car]:
        return self.repo.get_all_by_driver(driver_id)

    def add_driver_to_car(self, driver: Driver, car: Car) -> Car:
        """
        Assign a driver to a car and persist the assignment.
        Adding a driver that is already assigned changes nothing.
        """
        if driver.id in car.driver_ids():
            logger.debug(f"Driver #{driver.id} already assigned to car #{car.id}")
            return car
        car.drivers.append(driver)
        return self.repo.update(car)

    def remove_driver_from_car(self, driver: Driver, car: Car) -> Car:
        """Unassign a driver from a car and persist the remaining drivers."""
        car.drivers = [d for d in car.drivers if d.id != driver.id]
        return self.repo.update(car)
