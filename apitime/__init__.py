"""apitime — typed HTTP operations: declare, resolve, build, send, decode.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports from the defining modules, no star exports
"""
