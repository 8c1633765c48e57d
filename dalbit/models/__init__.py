"""
Data models for period history, symptoms and derived cycle values.
"""
