"""
Configuration management for seedgraph.

Loads and validates configuration from seedgraph.toml files using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from seedgraph.exceptions import ConfigError

CONFIG_FILENAME = "seedgraph.toml"


class GenerationConfig(BaseSettings):
    """Object generation configuration."""

    model_config = SettingsConfigDict(env_prefix="SEEDGRAPH_GENERATION_")

    default_count: Optional[int] = Field(
        default=None,
        ge=0,
        description="Count for seeds that don't declare one (None keeps 20)",
    )
    random_seed: Optional[int] = Field(
        default=None, description="Seed for the random source (None = unseeded)"
    )
    faker_locale: Optional[str] = Field(
        default=None, description="Faker locale for all seeds (None = per seed)"
    )
    counts: dict[str, int] = Field(
        default_factory=dict,
        description="Per-entity count overrides, keyed by entity class name",
    )


class DatabaseConfig(BaseSettings):
    """Existing-data database configuration."""

    model_config = SettingsConfigDict(env_prefix="SEEDGRAPH_DATABASE_")

    url: Optional[str] = Field(
        default=None, description="PostgreSQL connection URL (None = no existing data)"
    )
    schema_name: str = Field(default="public", description="Schema holding existing rows")
    tables: dict[str, str] = Field(
        default_factory=dict,
        description="Entity class name -> table name for existing-data lookups",
    )


class Config(BaseSettings):
    """Main configuration for seedgraph."""

    model_config = SettingsConfigDict(env_prefix="SEEDGRAPH_")

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to seedgraph.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config file is not valid TOML or fails validation
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls(**data)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(config_path, str(e)) from e
        except ValidationError as e:
            raise ConfigError(config_path, str(e)) from e

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from seedgraph.toml.

        Searches for seedgraph.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        # Walk up directory tree
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write seedgraph.toml
        """
        config_path = Path(path)
        generation = self.generation
        database = self.database

        lines = ["# seedgraph configuration", "", "[generation]"]
        if generation.default_count is not None:
            lines.append(f"default_count = {generation.default_count}")
        if generation.random_seed is not None:
            lines.append(f"random_seed = {generation.random_seed}")
        if generation.faker_locale is not None:
            lines.append(f'faker_locale = "{generation.faker_locale}"')

        if generation.counts:
            lines += ["", "[generation.counts]"]
            lines += [f"{name} = {count}" for name, count in generation.counts.items()]

        lines += ["", "[database]"]
        if database.url is not None:
            lines.append(f'url = "{database.url}"')
        lines.append(f'schema_name = "{database.schema_name}"')

        if database.tables:
            lines += ["", "[database.tables]"]
            lines += [f'{name} = "{table}"' for name, table in database.tables.items()]

        config_path.write_text("\n".join(lines) + "\n")

