"""
Configuration management for Cashell
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.logging import RichHandler
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Configuration model for Cashell"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Session behaviour
    fatal: bool = False
    log_level: str = "warning"
    history_size: int = 100

    # Profile scripts, resolved against home_dir
    profile_names: List[str] = [".cashrc"]
    windows_profile_name: str = "_cashrc"

    # Interrupt debouncing
    interrupt_threshold: int = 5
    interrupt_interval: float = 3.0
    interrupt_cooldown: int = 10000

    # Paths
    home_dir: Path = Path.home()
    config_dir: Optional[Path] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.load_from_file()
        self.load_from_env()

    @property
    def state_dir(self) -> Path:
        """Directory holding the config file and durable storage"""
        return Path(self.config_dir) if self.config_dir else Path(self.home_dir) / ".cashell"

    @property
    def config_file(self) -> Path:
        return self.state_dir / "config.json"

    @property
    def storage_file(self) -> Path:
        return self.state_dir / "storage.json"

    def load_from_file(self) -> None:
        """Load configuration from JSON file"""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    data = json.load(f)
                    for key, value in data.items():
                        if key in type(self).model_fields:
                            setattr(self, key, value)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Could not load config file %s: %s", self.config_file, e)

    def load_from_env(self) -> None:
        """Load configuration from environment variables"""
        # Load .env file if it exists
        load_dotenv()

        env_mapping = {
            'CASHELL_HOME': 'home_dir',
            'CASHELL_CONFIG_DIR': 'config_dir',
            'CASHELL_LOG_LEVEL': 'log_level',
            'CASHELL_FATAL': 'fatal',
        }

        for env_var, config_key in env_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                if config_key == 'fatal':
                    value = value.lower() in ('true', '1', 'yes', 'on')
                elif config_key in ('home_dir', 'config_dir'):
                    value = Path(value).expanduser()
                setattr(self, config_key, value)


def configure_logging(level: str = "warning") -> None:
    """Route diagnostics through rich, on stderr"""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


# Global config instance
_config = None

def get_config() -> Config:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = Config()
    return _config
