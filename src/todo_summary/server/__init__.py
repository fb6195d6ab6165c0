"""HTTP server for the todo REST API."""

from .app import APIError, create_app
from .bootstrap import build_repository, build_services, create_app_from_config

__all__ = ["create_app", "create_app_from_config", "build_services", "build_repository", "APIError"]
