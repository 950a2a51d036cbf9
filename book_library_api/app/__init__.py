"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The catalog domain is split into the record model, the
Pydantic schemas used on the wire, the service layer (validation,
storage and business rules) and the versioned HTTP routers under
``api/v1``.
"""

from .main import app  # noqa: F401
