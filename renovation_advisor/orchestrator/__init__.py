"""Advisor session orchestrating estimation, evaluation and ranking."""

from .session import AdvisorSession

__all__ = ["AdvisorSession"]
