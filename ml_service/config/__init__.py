from .ml_config import ForestConfig, HistoryConfig

__all__ = ["ForestConfig", "HistoryConfig"]
