import json
import logging
import os
from typing import Dict, List, Optional, Any

from sitemap_class_counter.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = "config.json"

DEFAULT_SITEMAP_URLS = [
    "https://ubuntu.com/static/files/sitemap.xml",
    "https://ubuntu.com/tutorials/sitemap.xml",
    "https://ubuntu.com/engage/sitemap.xml",
    "https://ubuntu.com/server/docs/sitemap.xml",
    "https://ubuntu.com/ceph/docs/sitemap.xml",
    "https://ubuntu.com/security/livepatch/docs/sitemap.xml",
    "https://ubuntu.com/robotics/docs/sitemap.xml",
]

DEFAULT_CLASS_NAMES = [
    "p-button",
    "p-button--positive",
    "p-button--negative",
    "p-button--brand",
    "p-button--link",
    "p-button--base",
]

DEFAULT_USER_AGENT = "SitemapClassCounter/1.0"


def default_config() -> Dict[str, Any]:
    return {
        "sitemap_urls": list(DEFAULT_SITEMAP_URLS),
        "class_names": list(DEFAULT_CLASS_NAMES),
        "user_agent": DEFAULT_USER_AGENT,
        "timeout": 30,
        "download_delay": 0.0,
        "output_dir": None,
    }


def load_config(path: str = CONFIG_FILE_PATH) -> Dict[str, Any]:
    """Loads config.json (if present) over the built-in defaults.

    Raises ConfigError when the file exists but is not valid.
    """
    config = default_config()
    if not os.path.exists(path):
        logger.info(f"Configuration file not found: {path}. Using built-in defaults.")
        return config
    try:
        with open(path, 'r') as f:
            file_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error decoding JSON from {path}: {e}") from e

    if not isinstance(file_data, dict):
        raise ConfigError(f"Configuration in {path} must be a JSON object.")

    config.update(file_data)
    validate_config(config)
    config["class_names"] = dedupe_class_names(config["class_names"])
    logger.info(f"Successfully loaded configuration from {path}")
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Validates the structure and content of the configuration."""
    sitemap_urls = config.get("sitemap_urls")
    if not isinstance(sitemap_urls, list):
        raise ConfigError("'sitemap_urls' key is missing or not a list in config.")
    if not sitemap_urls:
        logger.warning("'sitemap_urls' list is empty. No pages will be analyzed.")
    for i, url in enumerate(sitemap_urls):
        if not isinstance(url, str) or not url.startswith(("http://", "https://")):
            raise ConfigError(f"Sitemap URL at index {i} must be an http(s) URL, got: {url!r}")

    class_names = config.get("class_names")
    if not isinstance(class_names, list):
        raise ConfigError("'class_names' key is missing or not a list in config.")
    for i, class_name in enumerate(class_names):
        if not isinstance(class_name, str) or not class_name.strip():
            raise ConfigError(f"Class name at index {i} must be a non-empty string.")
        if len(class_name.split()) != 1:
            raise ConfigError(f"Class name at index {i} must not contain whitespace: {class_name!r}")

    timeout = config.get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"'timeout' must be a positive number, got: {timeout!r}")

    delay = config.get("download_delay")
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigError(f"'download_delay' must be a non-negative number, got: {delay!r}")

    user_agent = config.get("user_agent")
    if not isinstance(user_agent, str) or not user_agent.strip():
        logger.warning("'user_agent' key is missing or not a non-empty string. Using a default one is recommended.")

    logger.debug("Configuration validation successful.")


def dedupe_class_names(class_names: List[str]) -> List[str]:
    """Drops repeated class names, keeping the first occurrence."""
    seen = set()
    unique = []
    for class_name in class_names:
        if class_name in seen:
            logger.warning(f"Duplicate class name '{class_name}' ignored.")
            continue
        seen.add(class_name)
        unique.append(class_name)
    return unique


def apply_overrides(
    config: Dict[str, Any],
    sitemap_urls: Optional[List[str]] = None,
    class_names: Optional[List[str]] = None,
    output_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """Returns a copy of config with CLI-provided values taking precedence."""
    merged = dict(config)
    if sitemap_urls:
        merged["sitemap_urls"] = list(sitemap_urls)
    if class_names:
        merged["class_names"] = list(class_names)
    if output_dir:
        merged["output_dir"] = output_dir
    validate_config(merged)
    merged["class_names"] = dedupe_class_names(merged["class_names"])
    return merged
