"""
Configuration for the library registry.
"""
