import os
import yaml
from typing import Dict, Any, Optional

class Settings:
    """Configuration management for the network adapter dashboard."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.getenv('NETDASH_CONFIG_FILE', 'config/config.yaml')
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and environment variables."""
        config = {}

        # Load from YAML file if exists
        if os.path.exists(self.config_file):
            with open(self.config_file, 'r') as f:
                config = yaml.safe_load(f) or {}

        logging_config = config.get('logging', {})
        monitoring_config = config.get('monitoring', {})
        powershell_config = config.get('powershell', {})
        network_config = config.get('network', {})

        # Override with environment variables
        config.update({
            'logging': {
                'level': os.getenv('LOG_LEVEL', logging_config.get('level', 'INFO')),
                'file': os.getenv('LOG_FILE', logging_config.get('file', 'logs/adapter_dashboard.log')),
                'max_bytes': int(os.getenv('LOG_MAX_BYTES', logging_config.get('max_bytes', 10485760))),
                'backup_count': int(os.getenv('LOG_BACKUP_COUNT', logging_config.get('backup_count', 5))),
                'console': self._parse_bool(os.getenv('LOG_CONSOLE', logging_config.get('console', True))),
            },
            'monitoring': {
                'interval_ms': int(os.getenv('NETDASH_INTERVAL_MS', monitoring_config.get('interval_ms', 2000))),
                'capacity': int(os.getenv('NETDASH_CAPACITY', monitoring_config.get('capacity', 20))),
                'failure_policy': os.getenv('NETDASH_FAILURE_POLICY', monitoring_config.get('failure_policy', 'resilient')),
            },
            'powershell': {
                'executable': os.getenv('NETDASH_POWERSHELL', powershell_config.get('executable', 'powershell')),
                'timeout': float(os.getenv('NETDASH_POWERSHELL_TIMEOUT', powershell_config.get('timeout', 30))),
            },
            'network': {
                'connectivity_timeout': float(os.getenv('NETDASH_CONNECTIVITY_TIMEOUT', network_config.get('connectivity_timeout', 3))),
            }
        })

        return config

    def _parse_bool(self, value: Any) -> bool:
        """Parse boolean value from various formats."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        if isinstance(value, (int, float)):
            return bool(value)
        return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

# Global settings instance
settings = Settings()
