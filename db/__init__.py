"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, SQL dialect details and the store
clients that execute one parameterized statement at a time.
This layer is the lowest in the architecture and has no dependencies on other layers
except the shared models and error types.
"""
