"""Configuration subpackage for the ticker timer library.

This package provides the pydantic configuration models and the YAML
configuration manager used to set up logging and timer leak tracking.
"""
