"""
Line tokenizer for vCard blocks.

Turns the text of a single vCard into (name, params, value) triples. Nothing
in here raises on malformed input: lines that do not look like a property
are skipped.

File: vcard/tokenizer.py
Author: VCF Manager maintainers
Created: 2026-09-15
Last Modified: 2026-10-19
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List
from urllib.parse import unquote

log = logging.getLogger(__name__)

# NAME[;PARAM...]:VALUE with an optional Apple-style group prefix (item1.TEL).
# Params never contain a colon, so the value is everything after the first one.
PROPERTY_LINE = re.compile(
    r"^(?:[A-Za-z0-9-]+\.)?(?P<name>[A-Za-z0-9-]+)(?P<params>(?:;[^:]*)?):(?P<value>.*)$"
)

# Quoted-printable style escape, =C3=A1 -> á
HEX_ESCAPE = re.compile(r"=([A-F0-9]{2})")


@dataclass
class Property:
    """One property line of a vCard."""

    name: str  # Upper-cased
    params: List[str] = field(default_factory=list)
    value: str = ""


def unfold(text: str) -> List[str]:
    """
    Split a vCard block into logical lines.

    Line endings are normalized to LF and RFC folded continuation lines
    (starting with a space or tab) are joined back onto the previous line.
    """
    lines: List[str] = []
    for line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        if line[:1] in (" ", "\t") and lines:
            lines[-1] += line[1:]
        else:
            lines.append(line)
    return lines


def tokenize(text: str) -> Iterator[Property]:
    """
    Yield every property line of a vCard block, in order.

    Args:
        text: The text of one vCard (BEGIN/END markers may or may not be present)

    Yields:
        Property for each line that matches NAME[;PARAMS]:VALUE
    """
    for line in unfold(text):
        if not line.strip():
            continue

        match = PROPERTY_LINE.match(line)
        if match is None:
            log.debug(f"Skipping unrecognized vCard line: {line[:80]!r}")
            continue

        params = [p for p in match.group("params").split(";") if p]
        yield Property(
            name=match.group("name").upper(),
            params=params,
            value=match.group("value"),
        )


def group_properties(properties: Iterator[Property]) -> Dict[str, List[Property]]:
    """Index properties by name, keeping encounter order within each name."""
    grouped: Dict[str, List[Property]] = {}
    for prop in properties:
        grouped.setdefault(prop.name, []).append(prop)
    return grouped


def decode_value(raw: str) -> str:
    """
    Decode =XX hex escapes opportunistically.

    Values without an '=' are only trimmed. If the escapes do not form valid
    UTF-8 the trimmed raw text is returned instead.

    Examples:
        >>> decode_value("Jos=C3=A9")
        'José'
        >>> decode_value("  plain ")
        'plain'
        >>> decode_value("bad =FF escape")
        'bad =FF escape'
    """
    if not raw:
        return ""
    if "=" not in raw:
        return raw.strip()

    try:
        return unquote(HEX_ESCAPE.sub(r"%\1", raw).strip(), errors="strict")
    except UnicodeDecodeError:
        log.debug(f"Could not decode escaped value {raw[:80]!r}, keeping raw text")
        return raw.strip()


def encode_value(value: str) -> str:
    """
    Escape a value so that decode_value() reads it back unchanged.

    Values decoding would leave alone are written as-is. Otherwise '=' and
    '%' are hex-escaped, '=' first so the new escapes are not escaped again.

    Examples:
        >>> encode_value("plain")
        'plain'
        >>> encode_value("a=41")
        'a=3D41'
    """
    if not value or decode_value(value) == value.strip():
        return value
    return value.replace("=", "=3D").replace("%", "=25")
