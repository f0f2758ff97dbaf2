"""
Admin Panel
Blueprint registry.
"""
