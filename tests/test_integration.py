"""
Integration tests against a real PostgreSQL database.

A PostgreSQL container is started for the session (see the `postgres_url`
fixture); set TEST_DATABASE_URL to use an existing server instead. Every
test starts from freshly created tables.
"""

import pytest

from db.connection import close_pool, init_pool
from db.exceptions import DataAccessError
from db.init_db import create_tables, drop_tables
from models.car import Car
from models.driver import Driver
from models.manufacturer import Manufacturer
from repositories.car_repo import CarRepository
from repositories.driver_repo import DriverRepository
from repositories.manufacturer_repo import ManufacturerRepository


@pytest.fixture(scope="module", autouse=True)
def database(postgres_url):
    init_pool(dsn=postgres_url)
    yield
    drop_tables()
    close_pool()


@pytest.fixture(autouse=True)
def fresh_schema(database):
    drop_tables()
    create_tables()


@pytest.fixture
def cars():
    return CarRepository()


@pytest.fixture
def tesla():
    return ManufacturerRepository().create(Manufacturer(name="Tesla", country="USA"))


@pytest.fixture
def drivers():
    repo = DriverRepository()
    return [
        repo.create(Driver(name="Alice", license_number="AB1")),
        repo.create(Driver(name="Bob", license_number="CD2")),
        repo.create(Driver(name="Carol", license_number="EF3")),
    ]


def test_create_then_get_round_trip(cars, tesla, drivers):
    created = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=drivers[:2]))

    loaded = cars.get(created.id)

    assert created.id is not None
    assert loaded.model == "Model 3"
    assert loaded.manufacturer == tesla
    assert loaded.driver_ids() == {drivers[0].id, drivers[1].id}


def test_create_without_drivers(cars, tesla):
    created = cars.create(Car(model="Model3", manufacturer=tesla))

    loaded = cars.get(created.id)

    assert loaded.manufacturer.id == tesla.id
    assert loaded.drivers == []


def test_delete_hides_car(cars, tesla):
    car = cars.create(Car(model="Model S", manufacturer=tesla))

    assert cars.delete(car.id) is True
    assert cars.get(car.id) is None
    assert car.id not in {c.id for c in cars.get_all()}


def test_delete_missing_or_deleted_returns_false(cars, tesla):
    car = cars.create(Car(model="Model S", manufacturer=tesla))
    cars.delete(car.id)

    assert cars.delete(car.id) is False
    assert cars.delete(987654) is False


def test_update_replaces_driver_set(cars, tesla, drivers):
    car = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=drivers[:2]))

    car.drivers = [drivers[2]]
    cars.update(car)
    assert cars.get(car.id).driver_ids() == {drivers[2].id}

    car.drivers = []
    cars.update(car)
    assert cars.get(car.id).drivers == []


def test_update_changes_model_and_manufacturer(cars, tesla):
    bmw = ManufacturerRepository().create(Manufacturer(name="BMW", country="Germany"))
    car = cars.create(Car(model="Model 3", manufacturer=tesla))

    car.model = "i4"
    car.manufacturer = bmw
    cars.update(car)

    loaded = cars.get(car.id)
    assert loaded.model == "i4"
    assert loaded.manufacturer == bmw


def test_update_of_deleted_car_keeps_row_unchanged(cars, tesla):
    car = cars.create(Car(model="Model 3", manufacturer=tesla))
    cars.delete(car.id)

    car.model = "Cybertruck"
    cars.update(car)

    assert cars.get(car.id) is None


def test_get_all_by_driver_follows_reassignment(cars, tesla, drivers):
    alice, bob, _ = drivers
    first = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=[alice]))
    second = cars.create(Car(model="Model Y", manufacturer=tesla, drivers=[alice, bob]))

    assert {c.id for c in cars.get_all_by_driver(alice.id)} == {first.id, second.id}

    second.drivers = [bob]
    cars.update(second)

    assert {c.id for c in cars.get_all_by_driver(alice.id)} == {first.id}
    by_bob = cars.get_all_by_driver(bob.id)
    assert [c.id for c in by_bob] == [second.id]
    assert by_bob[0].driver_ids() == {bob.id}


def test_get_all_by_driver_skips_deleted_cars(cars, tesla, drivers):
    car = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=[drivers[0]]))
    cars.delete(car.id)

    assert cars.get_all_by_driver(drivers[0].id) == []
    assert cars.get_all_by_driver(987654) == []


def test_soft_deleted_driver_never_returned(cars, tesla, drivers):
    alice, bob, _ = drivers
    car = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=[alice, bob]))

    DriverRepository().delete(alice.id)

    assert cars.get(car.id).driver_ids() == {bob.id}
    assert [c.driver_ids() for c in cars.get_all()] == [{bob.id}]
    assert [c.driver_ids() for c in cars.get_all_by_driver(bob.id)] == [{bob.id}]


def test_attach_then_detach_single_driver(cars, tesla, drivers):
    driver = drivers[0]
    car = cars.create(Car(model="Model3", manufacturer=tesla))

    car.drivers = [driver]
    cars.update(car)
    assert cars.get(car.id).drivers == [driver]

    car.drivers = []
    cars.update(car)
    assert cars.get(car.id).drivers == []


def test_failed_driver_assignment_leaves_car_without_drivers(cars, tesla, drivers):
    ghost = Driver(id=987654, name="Ghost", license_number="0")
    car = Car(model="Model 3", manufacturer=tesla, drivers=[drivers[0], ghost])

    with pytest.raises(DataAccessError):
        cars.create(car)

    assert car.id is not None
    assert cars.get(car.id).drivers == []


def test_statement_error_keeps_pool_usable(cars, tesla):
    with pytest.raises(DataAccessError):
        cars.get("not-a-number")

    created = cars.create(Car(model="Model S", manufacturer=tesla))
    assert cars.get(created.id) is not None


def test_duplicate_driver_is_assigned_once(cars, tesla, drivers):
    car = cars.create(Car(model="Model 3", manufacturer=tesla, drivers=[drivers[0], drivers[0]]))

    assert cars.get(car.id).drivers == [drivers[0]]


def test_update_of_deleted_car_not_listed_for_driver(cars, tesla, drivers):
    car = cars.create(Car(model="Model 3", manufacturer=tesla))
    cars.delete(car.id)

    car.drivers = [drivers[1]]
    cars.update(car)

    assert cars.get_all_by_driver(drivers[1].id) == []
    assert cars.delete(car.id) is False
