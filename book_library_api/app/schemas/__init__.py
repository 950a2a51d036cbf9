"""
Pydantic schema definitions for API payloads.

Schemas are separated from the record model in ``models`` to decouple
the API representation (camelCase aliases, optional fields on input)
from persistence.
"""
