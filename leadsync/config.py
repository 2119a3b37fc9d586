"""Application settings loaded from .env, Streamlit secrets and the environment."""

import os
from pathlib import Path
from typing import List, Optional

import streamlit as st
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models.upload import MAX_UPLOAD_BYTES
from .utils.log import get_logger

logger = get_logger("config")

DEFAULT_WEBHOOK_URL = "https://parrot-giving-daily.ngrok-free.app/webhook-test/upload-lead"


def get_secret(key: str, default: str = "") -> str:
    """Get a secret from st.secrets (Streamlit Cloud) or os.environ (.env file)."""
    # st.secrets raises when no secrets.toml exists
    try:
        if hasattr(st, "secrets") and key in st.secrets:
            return str(st.secrets[key])
    except Exception:
        pass

    return os.getenv(key, default)


class Settings(BaseModel):
    """Runtime configuration for the upload pipeline and the records view."""

    supabase_url: str = Field("", description="Supabase project URL")
    supabase_key: str = Field("", description="Supabase anon or service key")
    leads_table: str = Field("leads", description="Table that stores uploaded leads")
    webhook_url: str = Field(DEFAULT_WEBHOOK_URL, description="Default completion webhook")
    webhook_timeout: float = Field(10.0, gt=0, description="Webhook request timeout in seconds")
    chunk_size: int = Field(50, ge=1, description="Records per insert request")
    chunk_delay: float = Field(0.2, ge=0, description="Pause between chunks in seconds")
    rows_per_page: int = Field(50, ge=1, description="Rows shown per table page")
    max_upload_bytes: int = Field(MAX_UPLOAD_BYTES, ge=1, description="Upload size ceiling")
    column_mapping_path: Optional[Path] = Field(
        None, description="Optional YAML file overriding the column mapping"
    )

    def missing_datastore_keys(self) -> List[str]:
        """Names of the required datastore settings that are not set."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_KEY")
        return missing

    @property
    def datastore_configured(self) -> bool:
        return not self.missing_datastore_keys()


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    Values are looked up in st.secrets first, then environment variables
    (populated from ``.env`` by python-dotenv). Missing datastore keys are
    logged as a configuration error; the app keeps running so the UI can
    report the problem.

    Args:
        env_file: Optional path to a dotenv file (defaults to ``.env`` lookup)

    Returns:
        Settings instance
    """
    load_dotenv(env_file)

    mapping_path = get_secret("COLUMN_MAPPING_PATH")
    settings = Settings(
        supabase_url=get_secret("SUPABASE_URL"),
        supabase_key=get_secret("SUPABASE_KEY") or get_secret("SUPABASE_ANON_KEY"),
        leads_table=get_secret("LEADS_TABLE", "leads"),
        webhook_url=get_secret("WEBHOOK_URL", DEFAULT_WEBHOOK_URL),
        webhook_timeout=float(get_secret("WEBHOOK_TIMEOUT_SECONDS", "10")),
        chunk_size=int(get_secret("CHUNK_SIZE", "50")),
        chunk_delay=float(get_secret("CHUNK_DELAY_SECONDS", "0.2")),
        rows_per_page=int(get_secret("ROWS_PER_PAGE", "50")),
        column_mapping_path=Path(mapping_path) if mapping_path else None,
    )

    missing = settings.missing_datastore_keys()
    if missing:
        logger.error(
            "Supabase Error: API Keys missing (%s). Check your .env file.",
            ", ".join(missing),
        )

    return settings
