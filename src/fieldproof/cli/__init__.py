"""fieldproof CLI - field verification eligibility checks."""

from .main import app, main

__all__ = ["main", "app"]
