"""
Core library registry: configuration parsing, change tracking and the registry itself.
"""
