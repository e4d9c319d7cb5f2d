"""Configuration management for cssvalues."""

from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResolveConfig(BaseModel):
    """How import specifiers are mapped to files."""

    extensions: List[str] = Field(default_factory=lambda: [".css"])
    main_fields: List[str] = Field(
        default_factory=lambda: ["style", "main"],
        alias="mainFields",
    )
    main_files: List[str] = Field(
        default_factory=lambda: ["index"],
        alias="mainFiles",
    )
    modules: List[str] = Field(default_factory=lambda: ["node_modules"])
    alias: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, extensions: List[str]) -> List[str]:
        return [ext if not ext or ext.startswith(".") else f".{ext}" for ext in extensions]


class ValuesConfig(BaseModel):
    """Options of the values replacement plugin.

    Field aliases keep the option names used by the PostCSS plugin this
    tool follows, so existing configuration can be reused as is.
    """

    no_emit_exports: bool = Field(False, alias="noEmitExports")
    preprocess_values: bool = Field(False, alias="preprocessValues")
    imports_as_module_requests: bool = Field(False, alias="importsAsModuleRequests")
    replace_in_selectors: bool = Field(False, alias="replaceInSelectors")
    at_rules: List[str] = Field(default_factory=lambda: ["media"], alias="atRules")
    resolve: ResolveConfig = Field(default_factory=ResolveConfig)
    cache_scope: Literal["run", "process"] = Field("run", alias="cacheScope")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("at_rules")
    @classmethod
    def _lower_at_rules(cls, at_rules: List[str]) -> List[str]:
        return [name.lstrip("@").lower() for name in at_rules]

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ValuesConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def load_default(cls) -> "ValuesConfig":
        """Load default configuration."""
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


def load_config(config_path: Optional[str] = None) -> ValuesConfig:
    """Load configuration from file or defaults."""
    if config_path:
        return ValuesConfig.load_from_file(Path(config_path))

    # Try to find config in standard locations
    standard_paths = [
        Path("cssvalues.yaml"),
        Path("config/cssvalues.yaml"),
        Path.home() / ".cssvalues" / "config.yaml"
    ]

    for path in standard_paths:
        if path.exists():
            return ValuesConfig.load_from_file(path)

    return ValuesConfig.load_default()
