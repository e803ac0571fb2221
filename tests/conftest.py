"""Shared pytest fixtures for fasttld tests."""
import pytest

from fasttld.psl.classifier import parse_suffix_lines
from fasttld.psl.trie import compile_trie

PSL_TEXT = """\
// Test fixture in Public Suffix List format.

// ===BEGIN ICANN DOMAINS===
com
com.ua
ua
uk
co.uk
cn
gov.cn
公司.cn
jp
*.kawasaki.jp
!city.kawasaki.jp
*.ck
!www.ck
mm
*.mm
de
// ===END ICANN DOMAINS===
// ===BEGIN PRIVATE DOMAINS===
blogspot.com
github.io
// ===END PRIVATE DOMAINS===
"""


@pytest.fixture
def suffix_collections():
    """Suffix collections parsed from the test list."""
    return parse_suffix_lines(PSL_TEXT.splitlines())


@pytest.fixture
def public_trie(suffix_collections):
    """Trie built from ICANN suffixes only."""
    return compile_trie(suffix_collections.public)


@pytest.fixture
def private_trie(suffix_collections):
    """Trie built from ICANN and PRIVATE suffixes."""
    return compile_trie(suffix_collections.all)


@pytest.fixture
def psl_file(tmp_path):
    """Test list written to a file."""
    path = tmp_path / "public_suffix_list.dat"
    path.write_text(PSL_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def psl_text():
    """Raw text of the test list."""
    return PSL_TEXT
