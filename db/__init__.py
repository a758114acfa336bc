"""
db/ - Database Layer
====================
PostgreSQL connection pool and schema creation.
"""
