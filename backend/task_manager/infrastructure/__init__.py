"""Infrastructure Layer — database sessions, password hashing and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver-level failures are mapped onto core/errors.py before leaving this layer
"""
