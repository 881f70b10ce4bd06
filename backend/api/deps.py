"""Common dependencies for API routes."""

from typing import Annotated

from fastapi import Depends

from config import Settings, get_settings

# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
