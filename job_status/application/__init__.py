"""
Application layer: read-side services over the status store.
"""
