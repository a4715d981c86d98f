"""
Configuration settings for the Parcel Memorial Generator
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import os

from dotenv import load_dotenv
from loguru import logger


@dataclass
class RingConfig:
    """Ring normalization tolerances (drawing units)"""
    # Points closer than this are treated as the same point
    closing_tolerance: float = 0.001


@dataclass
class AlignmentConfig:
    """Alignment sampling settings"""
    sample_interval: float = 1.0
    min_samples: int = 10


@dataclass
class ConfrontingConfig:
    """Confrontant resolution settings"""
    # Max distance from a side midpoint to an alignment or neighbor edge
    tolerance: float = 1.0
    public_space_label: str = "Public Area"


@dataclass
class ClassificationConfig:
    """Face classification rules"""
    rear_tolerance_deg: float = 45.0

    # Confrontant names containing any of these look like a street
    street_keywords: List[str] = field(default_factory=lambda: [
        "RUA", "AV", "ESTR", "ROD", "TRAV", "ALAM",
        "STREET", "ROAD", "LANE", "DRIVE", "HIGHWAY",
    ])


@dataclass
class NarrativeConfig:
    """Narrative text formatting"""
    length_decimals: int = 3
    decimal_separator: str = "."


@dataclass
class MemorialConfig:
    """Pipeline configuration"""
    ring: RingConfig = field(default_factory=RingConfig)
    alignment: AlignmentConfig = field(default_factory=AlignmentConfig)
    confronting: ConfrontingConfig = field(default_factory=ConfrontingConfig)
    classification: ClassificationConfig = field(default_factory=ClassificationConfig)
    narrative: NarrativeConfig = field(default_factory=NarrativeConfig)

    # Output settings
    output_dir: str = "output"


# Global config instance
config = MemorialConfig()


def get_config() -> MemorialConfig:
    """Get global configuration"""
    return config


def load_config(env_file: Optional[str] = None) -> MemorialConfig:
    """
    Build a configuration from defaults plus MEMORIAL_* environment overrides.

    A .env file is read first (existing environment variables win).

    Recognized variables:
        MEMORIAL_CONFRONTING_TOLERANCE
        MEMORIAL_PUBLIC_SPACE_LABEL
        MEMORIAL_CLOSING_TOLERANCE
        MEMORIAL_REAR_TOLERANCE_DEG
        MEMORIAL_SAMPLE_INTERVAL
        MEMORIAL_LENGTH_DECIMALS
        MEMORIAL_DECIMAL_SEPARATOR
        MEMORIAL_OUTPUT_DIR
    """
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=False)
        else:
            logger.warning(f"Env file not found: {env_file}")
    else:
        load_dotenv(override=False)

    cfg = MemorialConfig()

    if os.getenv("MEMORIAL_CONFRONTING_TOLERANCE"):
        cfg.confronting.tolerance = float(os.environ["MEMORIAL_CONFRONTING_TOLERANCE"])
    if os.getenv("MEMORIAL_PUBLIC_SPACE_LABEL"):
        cfg.confronting.public_space_label = os.environ["MEMORIAL_PUBLIC_SPACE_LABEL"]
    if os.getenv("MEMORIAL_CLOSING_TOLERANCE"):
        cfg.ring.closing_tolerance = float(os.environ["MEMORIAL_CLOSING_TOLERANCE"])
    if os.getenv("MEMORIAL_REAR_TOLERANCE_DEG"):
        cfg.classification.rear_tolerance_deg = float(os.environ["MEMORIAL_REAR_TOLERANCE_DEG"])
    if os.getenv("MEMORIAL_SAMPLE_INTERVAL"):
        cfg.alignment.sample_interval = float(os.environ["MEMORIAL_SAMPLE_INTERVAL"])
    if os.getenv("MEMORIAL_LENGTH_DECIMALS"):
        cfg.narrative.length_decimals = int(os.environ["MEMORIAL_LENGTH_DECIMALS"])
    if os.getenv("MEMORIAL_DECIMAL_SEPARATOR"):
        cfg.narrative.decimal_separator = os.environ["MEMORIAL_DECIMAL_SEPARATOR"]
    if os.getenv("MEMORIAL_OUTPUT_DIR"):
        cfg.output_dir = os.environ["MEMORIAL_OUTPUT_DIR"]

    validate_config(cfg)
    return cfg


def validate_config(config: MemorialConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.ring.closing_tolerance <= 0:
        errors.append(f"ring.closing_tolerance must be positive, got {config.ring.closing_tolerance}")

    if config.confronting.tolerance <= 0:
        errors.append(f"confronting.tolerance must be positive, got {config.confronting.tolerance}")
    if not config.confronting.public_space_label:
        errors.append("confronting.public_space_label is required but not set")

    if config.alignment.sample_interval <= 0:
        errors.append(f"alignment.sample_interval must be positive, got {config.alignment.sample_interval}")
    if config.alignment.min_samples < 1:
        errors.append(f"alignment.min_samples must be at least 1, got {config.alignment.min_samples}")

    rear_tol = config.classification.rear_tolerance_deg
    if rear_tol <= 0 or rear_tol > 180:
        errors.append(f"classification.rear_tolerance_deg must be in (0, 180], got {rear_tol}")

    if config.narrative.length_decimals < 0:
        errors.append(f"narrative.length_decimals must not be negative, got {config.narrative.length_decimals}")
    if not config.narrative.decimal_separator:
        errors.append("narrative.decimal_separator is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
