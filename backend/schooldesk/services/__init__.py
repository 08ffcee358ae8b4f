"""Services Layer: query/mutation runners and per-resource factories.

Invariants:
    - Runners own their state exclusively; nothing is shared between instances
    - Resource factories talk to the API only through ApiClient
"""
