"""Concrete adapters for the persistence, log and interaction ports."""
