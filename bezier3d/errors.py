"""Exceptions raised while (re)configuring a Bézier surface."""
from __future__ import annotations


class InvalidArgument(ValueError):
    """A configuration value violates a precondition (bad accuracy, malformed net, ...)."""


__all__ = ["InvalidArgument"]
