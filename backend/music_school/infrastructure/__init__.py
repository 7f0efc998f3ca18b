"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout/error mapping
    - Analytics failures are logged here and never propagate

Design Decisions:
    - Resilient wrappers over raw httpx calls: retry and error mapping stay out of services/
"""
