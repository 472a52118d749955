"""
Test suite for the library registry.
"""
