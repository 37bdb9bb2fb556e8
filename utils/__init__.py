"""
Utilities Package
Gas pricing and deployment bookkeeping helpers
"""

from .gas_calculator import GasCalculator
from .env_file import update_env_file

__all__ = [
    'GasCalculator',
    'update_env_file'
]
