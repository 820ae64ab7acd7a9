"""
Application Settings

All runtime configuration is read once from the environment (and an optional
.env file) into an immutable Settings object that is handed to create_app().
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    database_url: str = Field("mongodb://localhost:27017", description="MongoDB connection string")
    database_name: str = Field("vidly", description="MongoDB database name")
    secret_key: str = Field("dev-secret-key-change-me", description="JWT signing secret")
    algorithm: str = Field("HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(60 * 24, ge=1, description="Token lifetime")
    admin_email: Optional[str] = Field(None, description="Bootstrap admin email")
    admin_password: Optional[str] = Field(None, description="Bootstrap admin password")
    admin_name: str = Field("Administrator", description="Bootstrap admin display name")
    port: int = Field(8000, description="Port used when run as a script")
    log_level: str = Field("INFO", description="Root log level")

    @classmethod
    def from_env(cls) -> "Settings":
        # Load environment variables from .env file
        load_dotenv()
        values = {
            "database_url": os.getenv("DATABASE_URL"),
            "database_name": os.getenv("DATABASE_NAME"),
            "secret_key": os.getenv("SECRET_KEY"),
            "access_token_expire_minutes": os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES"),
            "admin_email": os.getenv("ADMIN_EMAIL"),
            "admin_password": os.getenv("ADMIN_PASSWORD"),
            "admin_name": os.getenv("ADMIN_NAME"),
            "port": os.getenv("PORT"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in values.items() if v})
