"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class FrontOfficeConfig(BaseSettings):
    """Front office applications configuration"""
    
    # Persistence configuration
    rooms_file: str = "rooms.txt"
    bookings_file: str = "bookings.txt"
    bank_file: str = "bank_data.txt"
    autosave: bool = True  # Save after every successful mutation
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    class Config:
        env_prefix = "FRONT_OFFICE_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = FrontOfficeConfig()


def get_config() -> FrontOfficeConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> FrontOfficeConfig:
    """Reload configuration from environment"""
    global config
    config = FrontOfficeConfig()
    return config
