"""
Configuration for the sparse matrix merge.
Centralizes the run options shared by the CLI and library callers.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from vcfsparse.errors import ConfigError

OUTPUT_FORMATS = ("cluto", "ccs")
STDIO_PATH = "-"


class MergeConfig(BaseModel):
    """Options for one merge run."""

    inputs: List[str] = Field(
        default_factory=list,
        description="Coordinate-sorted VCF inputs ('-' reads standard input)"
    )

    format: str = Field(
        default="cluto",
        description="Output matrix dialect: 'cluto' or 'ccs' (case-insensitive)"
    )

    output: Optional[str] = Field(
        default=None,
        description="Sparse matrix destination (None or '-' writes to standard output)"
    )

    sample_info_output: Optional[str] = Field(
        default=None,
        description="Destination for global sample names, one per line (None suppresses it)"
    )

    variant_info_output: Optional[str] = Field(
        default=None,
        description="Destination for per-row variant provenance (None suppresses it)"
    )

    debug: int = Field(
        default=0,
        ge=0,
        description="Diagnostic verbosity: 0 warnings, 1 info, 2+ debug"
    )

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        fmt = value.strip().lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"format must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}")
        return fmt


# Global configuration instance
_config: MergeConfig = MergeConfig()


def build_config(**kwargs) -> MergeConfig:
    """Validate options into a MergeConfig, raising ConfigError on bad values."""
    try:
        return MergeConfig(**kwargs)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def get_config() -> MergeConfig:
    """Get the global configuration instance."""
    return _config


def set_config(config: MergeConfig) -> MergeConfig:
    global _config
    _config = config
    return _config


def update_config(**kwargs) -> MergeConfig:
    """Update configuration parameters."""
    global _config
    current_dict = _config.model_dump()
    current_dict.update(kwargs)
    _config = build_config(**current_dict)
    return _config


def load_config_from_file(filepath: str) -> MergeConfig:
    """Load configuration from a JSON file."""
    import json
    global _config

    with open(filepath, 'r') as f:
        config_dict = json.load(f)

    _config = build_config(**config_dict)
    return _config


def save_config_to_file(filepath: str):
    """Save current configuration to a JSON file."""
    import json

    with open(filepath, 'w') as f:
        json.dump(_config.model_dump(), f, indent=2)
