"""Alarm company manager: customers, security systems and work orders."""

__version__ = "0.1.0"
