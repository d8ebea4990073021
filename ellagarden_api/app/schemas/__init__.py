"""
Pydantic schema definitions for API payloads and stored records.

Each domain (sections, documents, bookings, users) defines its own
models.  Field names are snake_case in Python and camelCase on the
wire, which is also the shape written to the JSON data files.
"""
