"""Services Layer — catalog access, contact form orchestration, analytics dispatch.

Invariants:
    - Services call core/ pure functions and infrastructure/ clients; never the reverse
    - External collaborators are injected, never imported as globals
"""
