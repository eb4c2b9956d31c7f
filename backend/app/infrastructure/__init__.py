"""Infrastructure Layer — database engine, sessions, and logging setup.

Invariants:
    - Infrastructure imports only core/errors.py from the core (error mapping)
    - All driver errors surface as DatabaseError
"""
