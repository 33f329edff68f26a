"""
Configuration package for Movie Night.
"""
