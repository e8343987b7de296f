"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Wire names (_id, dateJoined, msgFrom, msgDateTime) exist only here
    - Timestamps serialize as ISO-8601

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Inbound bodies are checked by core/validation.py, not by Pydantic, so
      handlers control the exact 400 message
"""
