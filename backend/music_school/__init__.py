"""Music School Application Package — course catalog and contact form API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
