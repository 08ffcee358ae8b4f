"""SchoolDesk: async query/mutation state layer, HTTP transport and demo API.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
