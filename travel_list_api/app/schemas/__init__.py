"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer, which works on plain
dictionaries, to decouple the API representation from persistence.
"""
