"""Content Manager (records management) integration package."""
import os
from typing import Final

API_BASE_URL: Final[str] = os.getenv("CONTENT_MANAGER_API_BASE_URL", "http://localhost/CMServiceAPI")
WEBDAV_URL: Final[str] = os.getenv("CONTENT_MANAGER_WEBDAV_URL", "http://localhost/CMWebDAV")
RECORD_PATH: Final[str] = "/Record"
