"""
Deployment Configuration
Loads config/deploy_config.json on top of built-in defaults
"""

import copy
import json
import os
from typing import Dict, Optional

from loguru import logger
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = "config/deploy_config.json"

DEFAULT_CONFIG = {
    'artifact_name': 'TokenSmithy',
    'constructor_args': [],
    'artifacts_dir': 'artifacts',
    'chain_id': None,  # None = ask the node
    'min_balance_ether': 0.0,
    'gas_settings': {
        'gas_limit_buffer': 1.2,
        'default_gas_limit': 3000000,
        'gas_price_buffer': 1.05,
        'max_gas_price_gwei': None,
        'priority_fee_gwei': None
    },
    'confirmation': {
        'timeout_seconds': 300,
        'poll_latency': 0.5
    },
    'output': {
        'env_key': None,
        'env_path': '.env'
    }
}


def _merge(base: Dict, overrides: Dict) -> Dict:
    """Recursively merge overrides into a copy of base"""
    merged = copy.deepcopy(base)

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_config(path: Optional[str] = None) -> Dict:
    """
    Load deployment configuration

    Args:
        path: JSON config file (None = DEPLOY_CONFIG_PATH or the default path)

    Returns:
        Config dict with every default key present
    """
    config_path = path or os.getenv('DEPLOY_CONFIG_PATH', DEFAULT_CONFIG_PATH)

    if not os.path.exists(config_path):
        logger.warning(f"Config file {config_path} not found, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        file_config = json.load(f)

    if not isinstance(file_config, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    logger.debug(f"Loaded config from {config_path}")
    return _merge(DEFAULT_CONFIG, file_config)
