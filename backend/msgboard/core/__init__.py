"""Core Layer — validation, normalization and result types. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clock is passed in, never read)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate the
      async repository calls around these pure helpers
"""
