"""
Domain Layer

Core order logic, separated from persistence concerns and infrastructure.

Structure:
- entities/: Records with identity (orders, clients)
- value_objects/: Immutable values (order status, line items, pricing, report rows)
- week_calendar: Friday-through-Thursday business week partitioning
- line_item_codec: Line item packing for the order detail column
- validation: Command validation rules
- reports: Weekly rankings
"""
