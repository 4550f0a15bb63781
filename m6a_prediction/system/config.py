"""Configuration management for m6A prediction.

Loads configuration from YAML file with environment variable overrides.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "m6a_prediction.yaml"


@dataclass
class PredictionConfig:
    """Configuration for the prediction pipeline."""
    model_path: Optional[Path] = None
    positive_threshold: float = 0.5
    positive_label: str = "Positive"
    output_sep: str = ","

    def __post_init__(self):
        if self.model_path is not None:
            self.model_path = Path(self.model_path)
        self.positive_threshold = float(self.positive_threshold)


def load_config(path: Union[str, Path, None] = None) -> PredictionConfig:
    """Load configuration from YAML file with environment variable overrides.

    Parameters
    ----------
    path : str or Path, optional
        Path to YAML config file. If None, uses the packaged default.

    Returns
    -------
    PredictionConfig
        Configuration object.

    Environment Variables
    ---------------------
    M6A_MODEL_PATH : str
        Override the classifier artifact path
    M6A_POSITIVE_THRESHOLD : str
        Override the positive threshold (default: 0.5)
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        y = yaml.safe_load(f) or {}

    model_path = os.getenv("M6A_MODEL_PATH", y.get("model_path"))
    if model_path is not None:
        model_path = Path(model_path)
        if not model_path.is_absolute():
            # Relative paths are relative to the config file
            model_path = path.parent / model_path

    return PredictionConfig(
        model_path=model_path,
        positive_threshold=float(os.getenv("M6A_POSITIVE_THRESHOLD", y.get("positive_threshold", 0.5))),
        positive_label=y.get("positive_label", "Positive"),
        output_sep=y.get("output_sep", ","),
    )
