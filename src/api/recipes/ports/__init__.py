"""Ports (interfaces) for Recipes bounded context."""
