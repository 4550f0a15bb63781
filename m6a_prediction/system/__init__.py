from .config import PredictionConfig, load_config

__all__ = ['PredictionConfig', 'load_config']
