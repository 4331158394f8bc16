"""Startup validation and configuration checks."""

from pathlib import Path

from baseline_checker import RegistryError, load_registry

from .config import get_together_api_key


def validate_config() -> None:
    """Warn at startup if .env, TOGETHER_API_KEY or the feature dataset is missing."""
    env_file = Path(".env")
    if not env_file.exists():
        print("⚠️  WARNING: .env file not found. AI fix suggestions will be disabled.")
        print("   Create .env and set TOGETHER_API_KEY to enable them.")
    elif not get_together_api_key():
        print("⚠️  WARNING: TOGETHER_API_KEY not set in .env. AI fix suggestions will be disabled.")
    try:
        registry = load_registry()
    except RegistryError as e:
        print(f"⚠️  WARNING: feature dataset unavailable: {e}")
    else:
        print(f"Loaded {len(registry)} web features")
