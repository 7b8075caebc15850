"""
MongoDB Configuration
"""
from typing import Dict, Union
from pydantic import Field
from pydantic_settings import BaseSettings


class MongoConfig(BaseSettings):
    """MongoDB connection and collection configuration"""

    model_config = {
        "env_prefix": "TOUCHPOINTS_MONGO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    # Connection Settings
    URI: str = Field(
        "mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    DB: str = Field("touchpoints", description="MongoDB database name")

    # Pool Settings
    MIN_POOL_SIZE: int = Field(1, ge=0, description="Minimum connection pool size")
    MAX_POOL_SIZE: int = Field(100, ge=1, description="Maximum connection pool size")
    MAX_IDLE_TIME_MS: int = Field(
        60000, ge=1000,
        description="Maximum connection idle time (ms)"
    )
    SERVER_SELECTION_TIMEOUT_MS: int = Field(
        5000, ge=100,
        description="How long a query waits for a reachable server (ms)"
    )

    # Collection Names
    COLLECTIONS: Dict[str, str] = Field(
        default={
            "website": "website_visits",
            "store": "store_visits",
            "signup": "login_signup",
        },
        description="MongoDB collection names per event kind"
    )

    def get_connection_settings(self) -> Dict[str, Union[str, int]]:
        """Get MongoDB connection settings"""
        return {
            "host": self.URI,
            "minPoolSize": self.MIN_POOL_SIZE,
            "maxPoolSize": self.MAX_POOL_SIZE,
            "maxIdleTimeMS": self.MAX_IDLE_TIME_MS,
            "serverSelectionTimeoutMS": self.SERVER_SELECTION_TIMEOUT_MS,
        }
