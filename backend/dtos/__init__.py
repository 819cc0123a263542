"""
Data Transfer Objects (DTOs) Layer

Keeps the HTTP contract apart from the ORM models and domain records.

Structure:
- request/: Bodies accepted by the order, client and settings endpoints
- response/: Orders, clients, settings and weekly reports as returned
- internal/: Command outcomes passed between services and routers
"""
