"""SQLCheck anti-pattern rules.

This module imports every rule module to trigger registration. The import
order below is the catalog order: logical design, physical design, query,
application.
"""

# Import rule modules to trigger registration via @register decorator
from . import logical_design, physical_design, query, application

__all__ = [
    "logical_design",
    "physical_design",
    "query",
    "application",
]
