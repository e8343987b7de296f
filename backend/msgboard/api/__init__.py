"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes validate, call one service operation, and map the Result to HTTP

Design Decisions:
    - Thin routes delegate to services; services never see Request/Response
"""
