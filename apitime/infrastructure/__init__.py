"""Infrastructure Layer — registry, transport and logging setup.

Invariants:
    - Infrastructure imports core types; core never imports infrastructure
    - All httpx failures mapped to core error types before leaving this layer
"""
