"""Adobe Sign integration package."""
import os
from typing import Final

BASE_URL: Final[str] = os.getenv("ADOBE_SIGN_BASE_URL", "https://api.na1.adobesign.com")
API_PREFIX: Final[str] = "/api/rest/v6"
