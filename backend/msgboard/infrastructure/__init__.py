"""Infrastructure Layer — database access, repositories, notifier and logging.

Invariants:
    - Driver exceptions are translated here and never leave this layer raw

Design Decisions:
    - Repositories implement the Protocols in core/repository_protocols.py
"""
