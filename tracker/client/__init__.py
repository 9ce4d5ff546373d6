"""Client Layer: session context, HTTP wrapper and view-state loaders over the JSON API.

Invariants:
    - One SessionContext per process, injected into ApiClient (no ad-hoc globals)
    - Views hold only local state; the server is the source of truth
"""
