"""
Drivers domain package.
"""
