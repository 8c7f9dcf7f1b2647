"""
API route modules.
"""

from legalease.api.routes import documents, templates

__all__ = ["documents", "templates"]
