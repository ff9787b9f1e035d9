"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts against a local MongoDB without any setup.  In a
production deployment override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Travel List API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level of the per-request access log; empty inherits LOG_LEVEL.
    access_log_level: str = os.getenv("ACCESS_LOG_LEVEL", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # MongoDB connection.  ``database_timeout`` bounds the initial
    # connect and ping at startup; ``operation_timeout`` is the deadline
    # applied to every individual collection call.
    database_uri: str = os.getenv("DATABASE_URI", "mongodb://localhost:27017")
    database_name: str = os.getenv("DATABASE_NAME", "travel_list")
    travel_collection: str = os.getenv("TRAVEL_COLLECTION", "travels")
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "20"))
    operation_timeout: float = float(os.getenv("OPERATION_TIMEOUT", "5"))

    # Directory holding the compiled web client.  Relative paths are
    # resolved against the current working directory.
    web_dir: str = os.getenv("WEB_DIR", os.path.join("web", "dist", "web"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before this module is imported.
settings = Settings()
