"""
Boundary layer: persistent record store and distributed lock providers.
"""
