#!/usr/bin/env python3
"""
Settings loader for Inkwell static site generator.
Supports configuration from inkwell.yml, inkwell.yaml, or inkwell.json files.
"""

import os
import json
import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide values baked into every page, feed and sitemap."""
    site_url: str = 'http://localhost:3000'
    site_title: str = 'My Site'
    site_description: str = ''
    author_name: str = ''
    author_url: str = ''
    umami_src: str = ''
    umami_website_id: str = ''
    posts_per_rss: int = 20
    recent_posts: int = 5
    minify: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'site_url', (self.site_url or '').rstrip('/'))
        object.__setattr__(self, 'posts_per_rss', max(1, int(self.posts_per_rss)))
        object.__setattr__(self, 'recent_posts', max(1, int(self.recent_posts)))

    @property
    def analytics_enabled(self) -> bool:
        return bool(self.umami_src and self.umami_website_id)

    def post_url(self, slug: str) -> str:
        """Absolute URL of a post."""
        return f"{self.site_url}/posts/{slug}/"


class InkwellSettings:
    """Load and manage Inkwell configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'output': 'docs',
        'content': 'content',
        'templates': 'templates',
        'assets': 'assets',
        'site_url': 'http://localhost:3000',
        'site_title': 'My Site',
        'site_description': '',
        'author_name': '',
        'author_url': '',
        'umami_src': '',
        'umami_website_id': '',
        'posts_per_rss': 20,
        'recent_posts': 5,
        'minify': False,
    }

    # Keys that end up in SiteConfig rather than steering the build
    SITE_KEYS = (
        'site_url', 'site_title', 'site_description', 'author_name', 'author_url',
        'umami_src', 'umami_website_id', 'posts_per_rss', 'recent_posts', 'minify',
    )

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['inkwell.yml', 'inkwell.yaml', 'inkwell.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ValueError: If the configuration file is malformed
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ValueError(f"Configuration file {config_file} must contain a mapping")
            # Merge with defaults, giving preference to loaded settings
            self.settings.update(loaded_settings)
            print(f"Loaded configuration from: {os.path.relpath(config_file)}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}") from e

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'inkwell.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Inkwell Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_url: https://example.com\n")
                    f.write("site_title: My Site\n")
                    f.write("site_description: Personal writing on thinking, building, and learning in public.\n")
                    f.write("author_name: Your Name\n")
                    f.write("author_url: https://example.com/about/\n\n")
                    f.write("# Build settings\n")
                    f.write("output: docs\n")
                    f.write("content: content\n")
                    f.write("templates: templates\n")
                    f.write("assets: assets\n\n")
                    f.write("# Feed and list settings\n")
                    f.write("posts_per_rss: 20\n")
                    f.write("recent_posts: 5\n\n")
                    f.write("# Analytics (Umami), leave empty to disable\n")
                    f.write("umami_src: ''\n")
                    f.write("umami_website_id: ''\n\n")
                    f.write("# Write .min.css / .min.js companions and link them\n")
                    f.write("minify: false\n")
                elif file_format == 'json':
                    sample_config = dict(self.DEFAULT_SETTINGS)
                    sample_config.update({
                        'site_url': 'https://example.com',
                        'author_name': 'Your Name',
                        'author_url': 'https://example.com/about/',
                    })
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ValueError(f"Unsupported config file format: {file_format}")
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}") from e

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                merged[key] = value

        return merged

    @classmethod
    def to_site_config(cls, settings: Dict[str, Any]) -> SiteConfig:
        """Build the immutable SiteConfig from a merged settings dictionary."""
        values = {key: settings[key] for key in cls.SITE_KEYS if settings.get(key) is not None}
        return SiteConfig(**values)
