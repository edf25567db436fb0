import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAME = "bench_config.json"


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.config_key = config_key
        self.errors = errors or []


class BenchmarkSettings(BaseSettings):
    """Resolved, immutable configuration of a benchmark run."""

    sample_limit: Optional[int] = Field(default=None, ge=0)
    threads: int = Field(default=1, ge=1)
    delay_ms: int = Field(default=0, ge=0)
    gpu_config: Optional[str] = None
    model_name: str = Field(min_length=1)
    model_url: str = Field(min_length=1)
    api_key: Optional[SecretStr] = None
    context_size: int = Field(gt=0)
    simulated: bool = False
    tokenizer_path: Optional[Path] = None
    dataset_path: Optional[Path] = None
    log_level: str = "INFO"
    library_log_levels: Dict[str, str] = {
        "urllib3": "WARNING",
        "datasets": "WARNING",
        "filelock": "WARNING",
        "fsspec": "WARNING",
        "matplotlib": "WARNING",
        "transformers": "ERROR",
    }

    model_config = SettingsConfigDict(
        frozen=True,
        protected_namespaces=('settings_',),
        env_prefix='COMPLETION_BENCH_',
    )

    @field_validator("gpu_config", "api_key", "tokenizer_path", "dataset_path", mode="before")
    @classmethod
    def empty_as_none(cls, value: Any) -> Any:
        """Treat blank optional values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("model_name", "model_url", mode="before")
    @classmethod
    def strip_required(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("tokenizer_path", "dataset_path")
    @classmethod
    def path_exists(cls, value: Optional[Path]) -> Optional[Path]:
        if value is not None and not value.exists():
            raise ValueError(f"file can't be found: {value.absolute()}")
        return value

    @classmethod
    def load(cls, **overrides: Any) -> "BenchmarkSettings":
        """Build settings, reporting any problem as a ConfigurationError.

        Args:
            **overrides: Explicit values, typically parsed from the command line.
                ``None`` values are ignored so that lower-precedence sources apply.

        Returns:
            Validated settings.

        Raises:
            ConfigurationError: If a required field is missing or a value is invalid.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
                for error in e.errors()
            ]
            first_key = str(e.errors()[0]['loc'][0]) if e.errors() and e.errors()[0]['loc'] else None
            raise ConfigurationError(
                "Invalid benchmark configuration: " + "; ".join(errors),
                config_key=first_key,
                errors=errors,
            ) from e

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from bench_config.json file."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                return json.load(f)
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Init settings (kwargs passed to constructor, i.e. command line)
        2. Environment variables
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            init_settings,
            env_settings,
            json_source,
        )

    def __str__(self) -> str:
        fields = []
        for name in type(self).model_fields:
            if name == "library_log_levels":
                continue
            value = getattr(self, name)
            # SecretStr renders masked
            if isinstance(value, (Path, SecretStr)):
                value = str(value)
            fields.append(f"{name}={value!r}")
        return f"BenchmarkSettings{{{', '.join(fields)}}}"
