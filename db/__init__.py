"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization and the data access error type.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
