"""Infrastructure Layer: database, security primitives and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
