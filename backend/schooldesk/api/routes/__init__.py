"""Route Modules: one file per resource group.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to core/ and the store)
"""
