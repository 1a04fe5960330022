"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection, rollback
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Manufacturers: reference data for cars
CREATE TABLE IF NOT EXISTS manufacturers (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    country         VARCHAR(255) NOT NULL
);

-- Drivers: soft-deleted via is_deleted
CREATE TABLE IF NOT EXISTS drivers (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    license_number  VARCHAR(255) NOT NULL,
    is_deleted      BOOLEAN NOT NULL DEFAULT FALSE
);

-- Cars: exactly one manufacturer each, soft-deleted via is_deleted
CREATE TABLE IF NOT EXISTS cars (
    id              BIGSERIAL PRIMARY KEY,
    model           VARCHAR(255) NOT NULL,
    manufacturer_id BIGINT NOT NULL REFERENCES manufacturers(id),
    is_deleted      BOOLEAN NOT NULL DEFAULT FALSE
);

-- Which drivers are currently assigned to which cars
CREATE TABLE IF NOT EXISTS cars_drivers (
    car_id          BIGINT NOT NULL REFERENCES cars(id),
    driver_id       BIGINT NOT NULL REFERENCES drivers(id),
    PRIMARY KEY (car_id, driver_id)
);

CREATE INDEX IF NOT EXISTS idx_cars_drivers_driver ON cars_drivers(driver_id);
"""

DROP_SQL = """
DROP TABLE IF EXISTS cars_drivers;
DROP TABLE IF EXISTS cars;
DROP TABLE IF EXISTS drivers;
DROP TABLE IF EXISTS manufacturers;
"""


def _run_script(sql: str, action: str) -> None:
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
        logger.info(f"Database schema {action} completed successfully.")
    except Exception as e:
        rollback(conn)
        logger.error(f"Failed to {action} schema: {e}")
        raise
    finally:
        release_connection(conn)


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run_script(SCHEMA_SQL, "create")


def drop_tables() -> None:
    """Drop every table of the schema, join table first."""
    _run_script(DROP_SQL, "drop")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
