"""
I/O helpers around the prediction engine.

Loading the classifier artifact and reading/writing feature tables happen
here, outside the pure prediction functions in ``predictor.py``.
"""

import logging
import pickle
from pathlib import Path
from typing import Any, Union

import joblib
import pandas as pd
import polars as pl

logger = logging.getLogger(__name__)

MODEL_SUFFIXES = ('.joblib', '.pkl', '.pickle', '.sav')


def resolve_model_path(model_dir: Path) -> Path:
    """
    Resolve a classifier artifact inside a directory.

    Search priority:
    1. rf_fit.joblib / rf_fit.pkl (the default artifact names)
    2. Any other model file (*.joblib, *.pkl, *.pickle, *.sav), preferring
       names containing "model" and then the most recently modified file

    Parameters
    ----------
    model_dir : Path
        Directory containing model files

    Returns
    -------
    Path
        Resolved model file path
    """
    for name in ('rf_fit.joblib', 'rf_fit.pkl'):
        candidate = model_dir / name
        if candidate.exists():
            logger.debug(f"Found default model artifact: {candidate.name}")
            return candidate

    candidates = [p for suffix in MODEL_SUFFIXES for p in model_dir.glob(f"*{suffix}")]
    if not candidates:
        raise FileNotFoundError(
            f"No model files found in directory: {model_dir}. "
            f"Expected one of: {', '.join('*' + s for s in MODEL_SUFFIXES)}"
        )

    def score_candidate(path: Path) -> tuple:
        score = 0
        if 'rf' in path.stem.lower():
            score += 50
        if 'model' in path.stem.lower():
            score += 25
        return (score, path.stat().st_mtime)

    best_candidate = max(candidates, key=score_candidate)
    logger.debug(f"Selected best candidate: {best_candidate.name}")
    return best_candidate


def load_classifier(model_path: Union[str, Path]) -> Any:
    """
    Load a trained classifier artifact.

    Parameters
    ----------
    model_path : str or Path
        A model file (.joblib, .pkl, .pickle, .sav) or a directory holding one.

    Returns
    -------
    Any
        Classifier object exposing ``predict_proba``.

    Raises
    ------
    FileNotFoundError
        If the file (or a model file in the directory) does not exist.
    TypeError
        If the loaded object has no ``predict_proba``.
    """
    model_path = Path(model_path)
    if model_path.is_dir():
        model_path = resolve_model_path(model_path)

    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {model_path}")

    logger.info(f"Loading classifier: {model_path}")
    if model_path.suffix == '.joblib':
        classifier = joblib.load(model_path)
    else:
        with open(model_path, 'rb') as f:
            classifier = pickle.load(f)

    if not hasattr(classifier, 'predict_proba'):
        raise TypeError(
            f"Object loaded from {model_path} ({type(classifier).__name__}) "
            "does not implement predict_proba"
        )
    return classifier


def read_feature_table(path: Union[str, Path]) -> pd.DataFrame:
    """Read a feature table from CSV, TSV or parquet."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Feature table not found: {path}")

    if path.suffix == '.parquet':
        return pl.read_parquet(path).to_pandas()
    elif path.suffix in ('.csv', '.tsv', '.txt'):
        sep = ',' if path.suffix == '.csv' else '\t'
        return pd.read_csv(path, sep=sep)
    else:
        raise ValueError(f"Unsupported table format: {path.suffix}")


def write_predictions(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sep = '\t' if path.suffix in ('.tsv', '.txt') else ','
    df.to_csv(path, sep=sep, index=False)
    logger.info(f"Wrote {df.shape[0]} predictions to {path}")
    return path
