"""Configuration management for Loki.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import configparser
from pathlib import Path
from typing import Optional

_TRUE_VALUES = ('1', 'true', 'yes', 'on', 'always', 'auto')
_FALSE_VALUES = ('0', 'false', 'no', 'off', 'never')


class Config:
    """
    Manages Loki configuration files.
    
    Configuration is stored in INI format:
    - Global config: ~/.lokiconfig
    - Repository config: .loki/config
    
    Repository config takes precedence over global config.
    """
    
    GLOBAL_CONFIG_PATH = Path.home() / '.lokiconfig'
    
    def __init__(self, repo_config_path: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.
        
        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self.global_config_path = Path(global_config_path) if global_config_path else self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None
    
    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.global_config_path.exists():
                self._global_config.read(self.global_config_path)
        return self._global_config
    
    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config
    
    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.
        
        Priority order (highest to lowest):
        1. Repository config
        2. Global config
        3. Fallback value
        
        Args:
            section: Config section (e.g., 'core', 'color')
            key: Config key (e.g., 'ui')
            fallback: Default value if not found
            
        Returns:
            Configuration value or fallback
        """
        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)
        
        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)
        
        return fallback
    
    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """
        Get a boolean configuration value.
        
        Unrecognized values fall back to the default.
        """
        value = self.get(section, key)
        if value is None:
            return fallback
        value = value.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        return fallback
    
    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.
        
        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
            config_path = self.global_config_path
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path
        
        if not config.has_section(section):
            config.add_section(section)
        
        config.set(section, key, value)
        
        with open(config_path, 'w') as f:
            config.write(f)


def get_config(repo=None) -> Config:
    """
    Get a Config instance.
    
    Args:
        repo: Repository instance, or None for global-only config
        
    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
