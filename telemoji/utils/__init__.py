"""
Utility helpers shared by the application layers.
"""
