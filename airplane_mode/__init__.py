"""Airplane Mode — block outbound network access and external assets while working locally."""

__version__ = "1.1.0"
