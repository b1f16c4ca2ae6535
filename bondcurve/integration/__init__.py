"""
Integration layer: environment-driven settings for tools and services.
"""
