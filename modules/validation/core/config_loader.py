"""
Validation configuration loader.

Loads and parses validation rules from YAML configuration files.
"""

import yaml
from typing import Dict, Any, List, Optional
from pathlib import Path
from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class ValidationConfigLoader:
    """
    Loads validation configuration from YAML files.

    Supports:
    - Global settings
    - Validator lists per record type
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to validation rules YAML file
                        If None, uses settings.validation_rules_file
        """
        if config_path is None:
            config_path = settings.validation_rules_file

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            yaml.YAMLError: If YAML parsing fails
        """
        if not self.config_path.exists():
            logger.warning(
                f"Validation config file not found: {self.config_path}. "
                "Using default configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logger.info(f"Loaded validation config from: {self.config_path}")
            return self._config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse validation config: {e}")
            raise

    def get_record_rules(self, record_type: str) -> List[Dict[str, Any]]:
        """
        Get validation rules for a specific record type.

        Args:
            record_type: Record type identifier (configuration, supplier, ...)

        Returns:
            List of validation rule configurations
        """
        if self._config is None:
            self.load()

        record_types = self._config.get('record_types') or {}
        record_config = record_types.get(record_type) or {}
        return record_config.get('validations') or []

    def get_record_types(self) -> List[str]:
        if self._config is None:
            self.load()

        return list((self._config.get('record_types') or {}).keys())

    def get_global_settings(self) -> Dict[str, Any]:
        """
        Get global validation settings.

        Returns:
            Global settings dictionary
        """
        if self._config is None:
            self.load()

        return self._config.get('global') or {}

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when file doesn't exist.

        Returns:
            Default configuration dictionary
        """
        return {
            'global': {
                'stop_on_first_error': False,
            },
            'record_types': {
                'configuration': {'validations': [
                    {'validator': 'configuration_value'},
                    {'validator': 'configuration_profile'},
                ]},
                'supplier': {'validations': [
                    {'validator': 'document_identity'},
                    {'validator': 'supplier_profile'},
                ]},
                'category': {'validations': [
                    {'validator': 'category_hierarchy'},
                    {'validator': 'category_profile'},
                ]},
                'position': {'validations': [
                    {'validator': 'position_profile'},
                ]},
            },
        }

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        self._config = None
        return self.load()
