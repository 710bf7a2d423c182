"""
Application configuration for VCF Manager.

Values come from the dataclass defaults, overridden by VCF_* environment
variables (a .env file in the working directory is loaded first).

File: config.py
Author: VCF Manager maintainers
Created: 2026-09-14
Last Modified: 2026-10-12
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from dotenv import find_dotenv, load_dotenv

from .models import LATEST_VERSION, NO_NAME, SUPPORTED_VERSIONS
from .normalization import DEFAULT_COUNTRY_CODE, country_code_for_region

log = logging.getLogger(__name__)

DEFAULT_EXPORT_VERSION = LATEST_VERSION


@dataclass
class Messages:
    """User-facing messages."""

    empty_list: str = "Empty list"
    no_data: str = "No data"
    no_name: str = NO_NAME
    confirm_clear: str = "Clear everything?"
    empty_agenda: str = "Empty contact list."
    no_duplicates: str = "No duplicates found."
    auto_merge_complete: str = "Automatic merge completed!"
    auto_merge_cancelled: str = "Auto-merge cancelled."
    sort_alpha: str = "List sorted alphabetically"
    sort_creation: str = "List sorted by creation order"
    version_upgrade: str = (
        "Some contacts were imported in an older vCard format. Export them in the "
        "modern vCard 4.0 format, or keep the legacy 3.0 format?"
    )

    def confirm_delete(self, count: int) -> str:
        return f"Delete {count} contact{'s' if count != 1 else ''}?"


@dataclass
class AppConfig:
    """Settings shared by the parser, the merge tools and the terminal UI."""

    # Phones
    default_country_code: str = DEFAULT_COUNTRY_CODE  # Spain

    # vCard
    default_version: str = DEFAULT_EXPORT_VERSION
    supported_versions: Tuple[str, ...] = SUPPORTED_VERSIONS

    # UI
    max_phones_display: int = 3  # Others collapsed into "+N more"
    export_basename: str = "contacts"  # Timestamp appended on export

    # Logging
    log_dir: Path = field(default_factory=lambda: Path("logs"))
    log_level: str = "INFO"

    messages: Messages = field(default_factory=Messages)

    def __post_init__(self):
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if self.default_version not in self.supported_versions:
            raise ValueError(
                f"Unsupported default vCard version {self.default_version!r}. "
                f"Must be one of: {self.supported_versions}"
            )


def load_config() -> AppConfig:
    """
    Build the configuration from defaults plus environment overrides.

    Recognized variables:
        VCF_DEFAULT_REGION: ISO region (ES, US, GB...) used for national numbers
        VCF_DEFAULT_COUNTRY_CODE: Explicit calling code, wins over the region
        VCF_DEFAULT_VERSION: vCard version used for export
        VCF_EXPORT_BASENAME: Base file name for exports
        VCF_LOG_DIR / VCF_LOG_LEVEL: Logging destination and level

    Returns:
        AppConfig instance
    """
    load_dotenv(find_dotenv(usecwd=True))

    config = AppConfig()

    region = os.getenv("VCF_DEFAULT_REGION")
    if region:
        config.default_country_code = country_code_for_region(region)

    code = os.getenv("VCF_DEFAULT_COUNTRY_CODE")
    if code:
        config.default_country_code = code if code.startswith("+") else f"+{code}"

    version = os.getenv("VCF_DEFAULT_VERSION")
    if version:
        if version not in config.supported_versions:
            raise ValueError(f"VCF_DEFAULT_VERSION must be one of: {config.supported_versions}")
        config.default_version = version

    config.export_basename = os.getenv("VCF_EXPORT_BASENAME", config.export_basename)
    config.log_dir = Path(os.getenv("VCF_LOG_DIR", str(config.log_dir)))
    config.log_level = os.getenv("VCF_LOG_LEVEL", config.log_level).upper()

    log.debug(f"Loaded config: country code {config.default_country_code}, export v{config.default_version}")
    return config
