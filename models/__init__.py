"""
models/ - Domain Models
=======================
Plain dataclass records for manufacturers, drivers and cars.
"""
