"""
Configuration module.

Default parameters, YAML-backed per-product overrides and validation.
"""
