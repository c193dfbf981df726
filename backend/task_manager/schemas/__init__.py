"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - External field names are camelCase (plus assignee_id), internal names snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Update schemas are three-state (absent / explicit null / value) via model_fields_set
"""
