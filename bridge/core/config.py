"""Configuration management for sensorbridge.

Uses Pydantic Settings for configuration with environment variable support.
Broker address, credentials and watch directories come from the command line;
everything else can be tuned here.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with SENSORBRIDGE_ prefix.
    Example: SENSORBRIDGE_MQTT_PORT=8883
    """

    model_config = SettingsConfigDict(
        env_prefix="SENSORBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MQTT client settings
    client_id: str = Field(default="sensorbridge", description="MQTT client id prefix")
    mqtt_port: int = Field(default=1883, description="Broker port when the address has none")
    mqtt_keepalive: int = Field(default=60, description="MQTT keepalive in seconds")
    mqtt_qos: int = Field(default=0, ge=0, le=2, description="QoS for all publishes")

    # Topic prefixes
    topic_prefix: str = Field(default="home/sensor", description="Base topic prefix")

    # Filesystem watching
    watch_debounce_ms: int = Field(
        default=5, ge=1, description="Longest time watchfiles groups changes into one batch"
    )
    watch_step_ms: int = Field(
        default=5, ge=1, description="Quiet time that ends a watchfiles batch"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
