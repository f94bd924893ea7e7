"""
Menu API: restaurant menu management REST backend.
"""
