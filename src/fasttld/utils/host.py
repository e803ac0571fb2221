"""
Host normalization for URLs and bare hostnames.

Strips scheme, userinfo, port and path/query/fragment without validating the
URL: malformed input yields whatever substring the rules leave behind.
"""
import logging
import re

from fasttld.models import HostParts

logger = logging.getLogger(__name__)

# Optional "scheme:" followed by "//"
SCHEME_PATTERN = re.compile(r"^(?:[A-Za-z0-9+\-.]+:)?//")

# Characters that end the host subcomponent
HOST_TERMINATORS = frozenset(":/?&#")

MAX_PORT = 65535


def _find_terminator(text: str) -> int:
    for index, char in enumerate(text):
        if char in HOST_TERMINATORS:
            return index
    return -1


def strip_scheme(url: str) -> str:
    """Remove a leading ``scheme://`` (or bare ``//``) prefix."""
    return SCHEME_PATTERN.sub("", url, count=1)


def parse_port(tail: str) -> str:
    """
    Parse the port out of the text following the host.

    Returns:
        Port digits when ``tail`` starts with ``:`` and holds an integer in
        [0, 65535], otherwise an empty string
    """
    if not tail.startswith(":"):
        return ""

    rest = tail[1:]
    end = _find_terminator(rest)
    candidate = rest if end == -1 else rest[:end]

    if not candidate.isdigit() or not candidate.isascii() or int(candidate) > MAX_PORT:
        logger.debug(f"Discarding invalid port {candidate!r}")
        return ""
    return candidate


def split_host(url: str) -> HostParts:
    """
    Split a URL into its bare host and the trailing remainder.

    Examples:
        - https://user:pw@www.example.com:8080/path -> www.example.com, port 8080
        - //example.com?q=1 -> example.com
        - example.com.:443 -> example.com, port 443
    """
    netloc = strip_scheme(url)
    netloc = netloc.strip(". \n\t\r")

    # Remove userinfo
    at_index = netloc.find("@")
    if at_index != -1:
        netloc = netloc[at_index + 1:]

    cut_index = _find_terminator(netloc)
    if cut_index == -1:
        return HostParts(host=netloc)

    tail = netloc[cut_index:]
    return HostParts(
        host=netloc[:cut_index].strip("."),
        port=parse_port(tail),
        tail=tail,
        cut=tail[0]
    )


def normalize_host(url: str) -> str:
    """Return only the bare host of ``url``."""
    return split_host(url).host
