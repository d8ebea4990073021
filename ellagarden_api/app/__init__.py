"""
Application package initializer.

This package contains the entrypoint for the BRF Ellagården API and
all of its submodules.  Each domain (handbook sections, documents,
guest apartment bookings) has a service in ``services``, pydantic
schemas in ``schemas`` and a router in ``api/v1/endpoints``.  Shared
infrastructure (configuration, logging, errors, the data store and
the admin gate) lives in ``core``.
"""

from .main import create_app  # noqa: F401
