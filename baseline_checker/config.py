"""
Run configuration: defaults, JSON config file, environment and overrides.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .usage import BaselineTier
from .utils import DEFAULT_IGNORE

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("baseline-checker.config.json", ".baselinerc.json")
DEFAULT_BROWSERS = ("chrome", "firefox", "safari", "edge")


class BaselineConfig(BaseModel):
    """Settings for one analysis run. Accepts camelCase keys from JSON files."""

    target: BaselineTier = Field(
        default=BaselineTier.WIDELY_AVAILABLE,
        description="Minimum acceptable Baseline tier",
    )
    browsers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BROWSERS),
        description="Browsers whose minimum versions are shown in reports",
    )
    exceptions: List[str] = Field(
        default_factory=list,
        description="Feature tokens or ids that never fail a run",
    )
    ignore_files: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE), alias="ignoreFiles")
    generate_fixes: bool = Field(default=False, alias="generateFixes")
    report_format: Literal["console", "json"] = Field(default="console", alias="reportFormat")
    output_file: Optional[str] = Field(default=None, alias="outputFile")
    dataset: Optional[str] = Field(default=None, description="Path to a web-features data.json")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


_FIELD_NAMES = {
    (info.alias or name): name for name, info in BaselineConfig.model_fields.items()
}


def _normalize(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Key a mapping by field name, whether it used aliases or names."""
    return {_FIELD_NAMES.get(key, key): value for key, value in data.items()}


def find_config_file(cwd: Optional[Path] = None) -> Optional[Path]:
    base = Path(cwd) if cwd else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def environment_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Settings taken from BASELINE_* variables."""
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    target = env.get("BASELINE_TARGET", "").strip()
    if target:
        data["target"] = target
    exceptions = env.get("BASELINE_EXCEPTIONS", "").strip()
    if exceptions:
        data["exceptions"] = [e.strip() for e in exceptions.split(",") if e.strip()]
    dataset = env.get("BASELINE_DATASET", "").strip()
    if dataset:
        data["dataset"] = dataset
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BaselineConfig:
    """Resolve configuration: defaults < file < environment < overrides.

    ``overrides`` entries set to None are ignored.

    Raises:
        ConfigError: the file is unreadable or a value fails validation.
    """
    if environ is None:
        load_dotenv()

    data: Dict[str, Any] = {}
    config_path = Path(path) if path else find_config_file(cwd)
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        data.update(_normalize(read_config_file(config_path)))
    data.update(environment_overrides(environ))
    if overrides:
        data.update({k: v for k, v in _normalize(overrides).items() if v is not None})

    try:
        return BaselineConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def write_default_config(path: Union[str, Path], force: bool = False) -> Path:
    """Write a config file holding every default. Refuses to overwrite unless ``force``."""
    path = Path(path)
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists (use --force to overwrite)")
    path.write_text(json.dumps(BaselineConfig().to_json_dict(), indent=2) + "\n", encoding="utf-8")
    return path
