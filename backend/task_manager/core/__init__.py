"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic given their inputs (clocks are injected);
      the only async definitions are the boundary Protocols

Design Decisions:
    - Functional core separated from imperative shell: token checks, bearer parsing,
      ownership rules and task filtering are testable without a database
"""
