"""
Utility modules: logging setup and configuration.
"""
