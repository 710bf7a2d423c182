"""
Reading and writing VCF files.

File: vcard/export.py
Author: VCF Manager maintainers
Created: 2026-09-18
Last Modified: 2026-10-06
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from ..config import AppConfig
from ..models import Contact
from .parser import parse
from .writer import serialize

log = logging.getLogger(__name__)


def export_filename(basename: str) -> str:
    """contacts_<milliseconds>.vcf"""
    return f"{basename}_{int(time.time() * 1000)}.vcf"


def export_contacts(
        contacts: List[Contact],
        directory: Path,
        config: AppConfig,
        version: Optional[str] = None,
    ) -> Optional[Path]:
    """
    Write contacts to a timestamped VCF file.

    An empty list is rejected: nothing is written and None is returned so the
    caller can show a warning.

    Args:
        contacts: Contacts to export
        directory: Destination directory (created if missing)
        config: Application config (export name, country code, default version)
        version: vCard version override, defaults to config.default_version

    Returns:
        Path of the written file, or None if there was nothing to export
    """
    if not contacts:
        log.warning(config.messages.empty_list)
        return None

    version = version or config.default_version
    content = serialize(contacts, version, config.default_country_code)

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(config.export_basename)
    path.write_text(content, encoding="utf-8")

    log.info(f"Exported {len(contacts)} contacts as vCard {version} to {path}")
    return path


def read_vcf_file(path: Path, config: AppConfig) -> List[Contact]:
    """
    Read and parse a VCF file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"VCF file not found: {path}")

    # Some exporters still write Latin-1; don't fail the whole import over it
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse(text, no_name=config.messages.no_name)
