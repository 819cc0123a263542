"""
Application services.

- order_service: Commands and queries over orders, clients and settings
- live_views / order_views: Push-driven read models over the database
- order_desk: Combined view state and commands for the operator screens
"""
