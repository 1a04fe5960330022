"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database, return domain model objects,
and wrap every driver failure in DataAccessError.
"""
