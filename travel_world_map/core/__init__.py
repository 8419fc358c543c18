"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, GeoJSON property keys, region presets
- exceptions: Custom exception hierarchy
"""
