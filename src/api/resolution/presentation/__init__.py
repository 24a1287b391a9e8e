"""Presentation layer for the Resolution bounded context."""

from resolution.presentation.routes import router

__all__ = ["router"]
