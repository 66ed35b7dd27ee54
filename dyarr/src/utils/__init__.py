from .config_loader import load_config, load_meta_config
from .logger import get_logger

__all__ = ["load_config", "load_meta_config", "get_logger"]
