from .json_io import load_value, save_json
from .config_loader import load_config, build_config, build_from_config

__all__ = ["load_value", "save_json", "load_config", "build_config", "build_from_config"]
