"""
Response DTOs

Outgoing payloads. Orders carry their decoded line items and display text
next to the stored detail column; week summaries carry the computed profit.
"""
