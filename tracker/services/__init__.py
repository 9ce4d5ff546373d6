"""Services Layer: storage adapter and auth orchestration (the imperative shell).

Invariants:
    - Services receive an AsyncSession; they never create engines
    - Store failures leave the session rolled back before the error propagates
"""
