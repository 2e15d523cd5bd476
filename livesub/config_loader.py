"""Handles loading configuration from YAML files and the environment."""

import hashlib
import yaml
import os
import logging
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'manifest_path': '../stream_hls/stream.m3u8',
    'segment_dir': None,
    'segment_suffix': '.ts',
    'subtitle_path': '../stream_hls/subtitles.vtt',
    'output_format': 'vtt',
    'cue_duration': 10,
    'poll_interval': 5,
    'source_language': 'en-US',
    'target_language': 'es',
    'project_id': None,
    'credentials_file': 'credentials.json',
    'recognition_engine': 'google',
    'translation_engine': 'google',
    'alternative_policy': 'all',
    'fingerprint_algorithm': 'sha256',
    'ffmpeg_path': None,
    'transcoder_timeout': None,
    'request_timeout': None,
    'whisper_model': 'base',
    'translation_model': 'Helsinki-NLP/opus-mt-en-es',
    'device': 'cpu',
    'log_dir': 'logs',
    'log_file': 'livesub.log',
}

# Environment variable -> config key
ENV_OVERRIDES = {
    'PROJECT_ID': 'project_id',
    'SOURCE_LANGUAGE': 'source_language',
    'TARGET_LANGUAGE': 'target_language',
    'GOOGLE_APPLICATION_CREDENTIALS': 'credentials_file',
}

RECOGNITION_ENGINES = ('google', 'whisper')
TRANSLATION_ENGINES = ('google', 'huggingface')
OUTPUT_FORMATS = ('vtt', 'srt')
ALTERNATIVE_POLICIES = ('all', 'top')

class ConfigLoader:
    """Loads configuration settings from a YAML file, a .env file and the environment."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            # An empty file means "all defaults"
            config = {}
        if not isinstance(config, dict):
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")

        merged = dict(DEFAULT_CONFIG)
        merged.update(config)
        logger.info(f"Configuration loaded successfully from {config_path}")
        return merged

    def apply_env_overrides(self, config: dict, dotenv_path: Optional[str] = None) -> dict:
        """
        Overrides config values from a .env file and the process environment.

        Variables already set in the environment win over the .env file.

        Args:
            config: Configuration dictionary to update in place.
            dotenv_path: Explicit .env path. None searches from the working directory.

        Returns:
            The updated configuration dictionary.
        """
        if load_dotenv(dotenv_path=dotenv_path):
            logger.info("Loaded environment variables from .env file")
        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                logger.info(f"Overriding '{key}' from environment variable {env_name}")
                config[key] = value
        return config

def _positive_number(config: dict, key: str, allow_none: bool = False) -> None:
    value = config.get(key)
    if value is None and allow_none:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(f"'{key}' must be a positive number, got {value!r}")

def validate_config(config: dict) -> dict:
    """
    Checks that a merged configuration can start the pipeline.

    Raises:
        ConfigurationError: Naming the first invalid or missing setting.
    """
    for key in ('manifest_path', 'subtitle_path', 'source_language', 'target_language', 'segment_suffix'):
        if not config.get(key):
            raise ConfigurationError(f"Configuration missing '{key}'.")

    if config.get('recognition_engine') not in RECOGNITION_ENGINES:
        raise ConfigurationError(
            f"Unsupported recognition_engine '{config.get('recognition_engine')}'. Choose from {RECOGNITION_ENGINES}."
        )
    if config.get('translation_engine') not in TRANSLATION_ENGINES:
        raise ConfigurationError(
            f"Unsupported translation_engine '{config.get('translation_engine')}'. Choose from {TRANSLATION_ENGINES}."
        )
    if str(config.get('output_format', '')).lower() not in OUTPUT_FORMATS:
        raise ConfigurationError(f"Unsupported output format '{config.get('output_format')}'. Choose from {OUTPUT_FORMATS}.")
    if config.get('alternative_policy') not in ALTERNATIVE_POLICIES:
        raise ConfigurationError(
            f"Unsupported alternative_policy '{config.get('alternative_policy')}'. Choose from {ALTERNATIVE_POLICIES}."
        )
    if config['translation_engine'] == 'google' and not config.get('project_id'):
        raise ConfigurationError("Configuration missing 'project_id' (required by the Google translation engine).")

    algorithm = config.get('fingerprint_algorithm')
    if algorithm not in hashlib.algorithms_available or str(algorithm).startswith('shake'):
        raise ConfigurationError(f"Unsupported fingerprint_algorithm '{algorithm}'.")

    _positive_number(config, 'cue_duration')
    poll_interval = config.get('poll_interval')
    if isinstance(poll_interval, bool) or not isinstance(poll_interval, (int, float)) or poll_interval < 0:
        raise ConfigurationError(f"'poll_interval' must be a non-negative number, got {poll_interval!r}")
    _positive_number(config, 'transcoder_timeout', allow_none=True)
    _positive_number(config, 'request_timeout', allow_none=True)
    return config
