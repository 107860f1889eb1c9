# core/config.py
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import logging
from typing import List

# Load variables from .env file located in the project root directory
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path)
else:
    load_dotenv() # Fallback

class Settings(BaseSettings):
    """Loads configuration settings from environment variables and .env file."""

    # --- Azure Storage Configuration ---
    AZURE_STORAGE_ACCOUNT_NAME: str | None = None
    AZURE_STORAGE_CONNECTION_STRING: str | None = None

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # --- Upload Staging ---
    UPLOAD_DIR: str = "uploads"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

# Instantiate settings once for import
settings = Settings()

# --- Logging Setup ---
log_level_str = settings.LOG_LEVEL.upper(); log_level = getattr(logging, log_level_str, logging.INFO)
logging.basicConfig(level=log_level, format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
logger = logging.getLogger("BlobGateway_Core")
logging.getLogger("azure").setLevel(logging.WARNING); logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("watchfiles").setLevel(logging.WARNING)

# --- Configuration Validation Checks ---
logger.info(f"Core Settings loaded. Log Level: {log_level_str}")
if not settings.AZURE_STORAGE_CONNECTION_STRING: logger.warning("AZURE_STORAGE_CONNECTION_STRING missing. Storage routes will be unavailable.")
if not settings.AZURE_STORAGE_ACCOUNT_NAME: logger.warning("AZURE_STORAGE_ACCOUNT_NAME missing.")
else: logger.info(f"Using Azure Storage account: {settings.AZURE_STORAGE_ACCOUNT_NAME}")
logger.info(f"Upload staging directory: {settings.UPLOAD_DIR}, listening port: {settings.PORT}")
