"""
Test suite for Grantify filters and search.
"""
