"""
GuestNotes Client — Configuration
===================================

What:  Client settings read from NOTES_* environment variables (or .env).
How:   Same Pydantic Settings pattern as the backend's app.config.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """
    NOTES_API_URL:    Base URL of the GuestNotes backend
    NOTES_STATE_PATH: JSON file holding the persisted anonymous identity
    """

    api_url: str = Field(default="http://localhost:5000")
    state_path: Path = Field(default=Path("~/.guestnotes/state.json"))

    model_config = {
        "env_prefix": "NOTES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
