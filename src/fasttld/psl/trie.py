"""
Compressed suffix trie construction.

Suffixes are stored label by label in reverse order, so ``us.gov.pl`` lives
at the path ``pl`` -> ``gov`` -> ``us``. A branch that is itself a complete
suffix carries an ``_END`` entry (``cn`` next to ``gov.cn``); a branch whose
only entry is ``_END`` collapses to a leaf.
"""
from __future__ import annotations

from typing import Iterable, Union

from fasttld.models import END, LEAF, TrieNode

# Build-time representation: nested dicts with True for leaves
_Draft = Union[dict, bool]


def _mark_suffix(node: dict, label: str) -> None:
    """Mark ``node[label]`` as a complete suffix, keeping existing children."""
    existing = node.get(label)
    if isinstance(existing, dict):
        existing[END] = True
    else:
        node[label] = True


def insert_labels(trie: dict, labels: list[str]) -> None:
    """
    Insert a reversed label path into a draft trie.

    An intermediate leaf that a longer path has to pass through turns into a
    branch holding ``_END`` plus the new child.
    """
    if not labels:
        return

    node = trie
    for label in labels[:-1]:
        child = node.get(label)
        if child is None:
            child = node[label] = {}
        elif child is True:
            child = node[label] = {END: True}
        node = child

    _mark_suffix(node, labels[-1])


def collapse(draft: _Draft) -> TrieNode:
    """Freeze a draft trie, turning ``{_END: True}``-only branches into leaves."""
    if draft is True or draft == {END: True}:
        return LEAF
    return TrieNode.branch({label: collapse(child) for label, child in draft.items()})


def compile_trie(suffixes: Iterable[str]) -> TrieNode:
    """
    Compile suffix strings into an immutable trie.

    Args:
        suffixes: PSL entries such as ``com``, ``co.uk``, ``*.ck``, ``!www.ck``

    Returns:
        Root branch of the trie
    """
    draft: dict = {}

    for suffix in suffixes:
        labels = suffix.split(".")
        if len(labels) == 1:
            branch = draft.get(suffix)
            if isinstance(branch, dict):
                branch[END] = True
            else:
                draft[suffix] = {END: True}
        else:
            labels.reverse()
            insert_labels(draft, labels)

    # The root is a branch even when empty, and never a suffix itself
    draft.pop(END, None)
    return TrieNode.branch({label: collapse(child) for label, child in draft.items()})
