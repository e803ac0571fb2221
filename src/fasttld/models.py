"""Data models for suffix tries and extraction results."""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# Distinguished trie keys
END = "_END"
WILDCARD = "*"
EXCEPTION_PREFIX = "!"


class NodeKind(str, Enum):
    """Trie node kind enumeration."""
    LEAF = "leaf"
    BRANCH = "branch"


@dataclass(frozen=True)
class TrieNode:
    """
    Node of the compiled suffix trie.

    A leaf marks a valid suffix with no longer suffixes beneath it. A branch
    maps suffix labels (stored outermost first) to child nodes; the ``_END``
    key marks the branch itself as a complete suffix, ``*`` a wildcard level
    and ``!label`` an exception to that wildcard.
    """
    kind: NodeKind
    children: Mapping[str, "TrieNode"] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def branch(cls, children: Mapping[str, "TrieNode"]) -> "TrieNode":
        return cls(NodeKind.BRANCH, MappingProxyType(dict(children)))

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def get(self, label: str) -> Optional["TrieNode"]:
        return self.children.get(label)

    def __contains__(self, label: str) -> bool:
        return label in self.children

    def to_dict(self):
        """Plain nested-dict form, with ``True`` standing for leaves."""
        if self.is_leaf:
            return True
        return {label: child.to_dict() for label, child in self.children.items()}


LEAF = TrieNode(NodeKind.LEAF)


@dataclass(frozen=True)
class SuffixCollections:
    """Suffixes parsed from a Public Suffix List, in file order."""
    public: Tuple[str, ...] = ()
    private: Tuple[str, ...] = ()
    all: Tuple[str, ...] = ()

    def select(self, include_private: bool) -> Tuple[str, ...]:
        """Suffixes that go into a trie for the given private-suffix setting."""
        return self.all if include_private else self.public


@dataclass(frozen=True)
class ExtractRequest:
    """A single extraction call."""
    url: str
    convert_to_punycode: bool = False
    ignore_subdomains: bool = False


@dataclass(frozen=True)
class ExtractResult:
    """
    Components of an extracted hostname.

    Each field is empty when not applicable. For
    ``https://maps.google.com.ua:8080/a/path`` the result is subdomain
    ``maps``, domain ``google``, suffix ``com.ua``, registered domain
    ``google.com.ua`` and port ``8080``.
    """
    subdomain: str = ""
    domain: str = ""
    suffix: str = ""
    registered_domain: str = ""
    port: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "subdomain": self.subdomain,
            "domain": self.domain,
            "suffix": self.suffix,
            "registered_domain": self.registered_domain,
            "port": self.port,
        }


@dataclass(frozen=True)
class HostParts:
    """Output of host normalization."""
    host: str
    port: str = ""
    tail: str = ""  # Everything from the cut character on
    cut: str = ""   # Character that ended the host, if any
