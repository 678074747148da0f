"""
Configuration settings for the Parcel Tracker Backend.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""
    
    # Application
    app_name: str = "Parcel Tracker Backend"
    api_version: str = "v1"
    debug: bool = False
    log_level: str = "INFO"
    
    # Anomaly / Confidence Configuration
    stall_threshold_hours: float = 48.0
    freshness_horizon_hours: float = 72.0
    
    # Carrier Detection Configuration
    postal_country_code: str = "IE"
    postal_carrier_label: str = "An Post"
    numeric_carrier_label: str = "DPD"
    
    # Text Extraction Configuration
    tracking_query_keys: List[str] = ["trackingId", "trackingNumber"]
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
