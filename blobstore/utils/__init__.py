"""Helpers used by the storage drivers."""
