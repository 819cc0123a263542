"""
Request DTOs

Incoming bodies for orders, clients and default pricing. Only shape is
checked here; business rules are applied by OrderService.
"""
