"""
Runtime configuration.
"""
