"""Services — entity operations, integrity guards, login and startup seeding.

Invariants:
    - Services flush, never commit: the route owns the transaction boundary
    - Failures raised as core/errors.py exceptions, translated centrally by the API layer
    - Principals arrive as explicit arguments; no service reads request state
"""
