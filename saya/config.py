"""
Engine configuration models.

The surrounding application hands the engine a list of dictionary sources
and an enrichment switch. These pydantic models hold that configuration,
either built from the environment defaults in :mod:`saya.settings` or read
from a JSON file.

Usage:
    from saya.config import EngineConfig

    config = EngineConfig.load("saya.json")
    config = EngineConfig.from_env()
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from saya import settings
from saya.errors import ConfigError


class DictionaryConfig(BaseModel):
    """Where dictionary data comes from."""
    enabled: bool = Field(True, description="Load dictionaries at all")
    base_path: Path = Field(
        default_factory=lambda: settings.DICTIONARY_PATH,
        description="Base dictionary file",
    )
    additional_paths: List[Path] = Field(
        default_factory=list,
        description="Supplemental dictionaries merged on top of the base, in order",
    )
    language: str = Field(settings.TARGET_LANGUAGE, description="Gloss language to keep")


class EnrichmentConfig(BaseModel):
    """Frequency, pitch-accent and JLPT enrichment sources."""
    enabled: bool = Field(True, description="Attach enrichment metadata to results")
    frequency_path: Optional[Path] = Field(None, description="word<TAB>rank file")
    pitch_accent_path: Optional[Path] = Field(None, description="word<TAB>drop file")
    jlpt_path: Optional[Path] = Field(None, description="word<TAB>level file")


class EngineConfig(BaseModel):
    """Top-level engine configuration."""
    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a configuration from the environment-driven settings."""
        return cls(
            dictionary=DictionaryConfig(
                base_path=settings.DICTIONARY_PATH,
                additional_paths=list(settings.SUPPLEMENTAL_DICTIONARIES),
                language=settings.TARGET_LANGUAGE,
            ),
            enrichment=EnrichmentConfig(
                enabled=settings.ENRICHMENT_ENABLED,
                frequency_path=settings.FREQUENCY_PATH,
                pitch_accent_path=settings.PITCH_ACCENT_PATH,
                jlpt_path=settings.JLPT_PATH,
            ),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "EngineConfig":
        """
        Read a configuration from a JSON file.

        Missing keys take their defaults, so ``{}`` is a valid file.

        Args:
            path: Path to the JSON configuration file.

        Returns:
            The parsed configuration.

        Raises:
            ConfigError: If the file cannot be read or does not validate.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e
