"""Configuration and errors shared by all storage drivers."""
