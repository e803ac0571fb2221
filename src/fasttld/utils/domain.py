"""IDNA conversion and IP literal detection for hostnames."""
import ipaddress
import logging

import idna

logger = logging.getLogger(__name__)


def to_ascii(text: str) -> str:
    """
    Convert a dotted name to its ASCII (Punycode) form.

    Labels that are already ASCII pass through untouched, so PSL syntax such
    as ``*`` and ``!www`` survives the conversion.

    Examples:
        - 公司.cn -> xn--55qx5d.cn
        - *.ck -> *.ck

    Raises:
        idna.IDNAError: If a label cannot be encoded
    """
    labels = []
    for label in text.split("."):
        if label.isascii():
            labels.append(label)
        else:
            labels.append(idna.encode(label, uts46=True).decode("ascii"))
    return ".".join(labels)


def format_as_punycode(host: str) -> str:
    """
    Lowercase and Punycode-encode a hostname.

    Returns:
        ASCII hostname, or an empty string if the name cannot be encoded
    """
    try:
        return to_ascii(host.strip().lower())
    except (idna.IDNAError, UnicodeError) as e:
        logger.warning(f"Cannot convert {host!r} to punycode: {e}")
        return ""


def is_ipv4_address(host: str) -> bool:
    """Check if host is a literal IPv4 address."""
    try:
        ipaddress.IPv4Address(host)
        return True
    except ValueError:
        return False
