"""Core Layer — pure operation logic: types, coders, request building, diagnostics.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - No IO and no async in core/; logging is the only side channel

Design Decisions:
    - Functional core separated from imperative shell (registry, transport, runner)
"""
