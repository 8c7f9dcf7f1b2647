"""
LegalEase: plain-language analysis and risk scoring for legal documents.

This package turns a contract into a plain-language analysis produced by a
generative backend, scores its risk with deterministic rules, answers
follow-up questions, and compares two documents side by side.
"""

__version__ = "0.1.0"
__author__ = "LegalEase Team"

from legalease.config import get_settings

__all__ = ["get_settings", "__version__"]
