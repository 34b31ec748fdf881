"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ allocation logic (errors only)
    - Database failures surface as DatabaseError

Design Decisions:
    - One module per concern: database.py (sessions), observability.py (logging)
"""
