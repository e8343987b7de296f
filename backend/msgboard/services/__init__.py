"""Service Layer — orchestrates validation, normalization and repository calls.

Invariants:
    - Every public operation returns a Result (core/result.py) or, for
      get_messages, a list
    - No exception from a repository ever reaches the caller

Design Decisions:
    - Repositories injected via constructor (no module-level DB handle)
"""
