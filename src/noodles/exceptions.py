"""Noodles exception hierarchy.

Every error raised by noodles itself inherits from NoodlesError. Domain
exceptions also inherit from their stdlib counterpart, so an
``except ValueError:`` written against plain arguments checking keeps working.

Errors raised by caller-supplied workers are never wrapped; they surface
unchanged wherever the worker was invoked.
"""

from __future__ import annotations


class NoodlesError(Exception):
    """Base exception for all noodles errors."""


class ConfigurationError(NoodlesError, ValueError):
    """Invalid configuration, parameters, or options."""


class EmptySequenceError(ConfigurationError):
    """reduce() was given an empty sequence and no initial value."""


__all__ = [
    "NoodlesError",
    "ConfigurationError",
    "EmptySequenceError",
]
