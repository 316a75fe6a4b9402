"""
Configuration management for the files gateway.

Contains the Pydantic settings and the logging bootstrap shared by the API
process and the CLI.
"""
