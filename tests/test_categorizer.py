"""
Tests for file categorization.
"""

import pytest

from autocommit.compression import categorize_file, count_categories
from autocommit.schemas import ChangeFragment, FileCategory


@pytest.mark.parametrize(
    "path,expected",
    [
        # Test patterns win over the core extension
        ("auth.test.ts", FileCategory.TEST),
        ("src/components/Button.spec.tsx", FileCategory.TEST),
        ("pkg/handler.test.go", FileCategory.TEST),
        ("tests/test_cli.py", FileCategory.TEST),
        ("pkg/server_test.go", FileCategory.TEST),
        # Docs
        ("README.md", FileCategory.DOCS),
        ("docs/guide.rst", FileCategory.DOCS),
        ("notes.txt", FileCategory.DOCS),
        ("manual.adoc", FileCategory.DOCS),
        # Config
        ("package.json", FileCategory.CONFIG),
        ("Cargo.toml", FileCategory.CONFIG),
        ("setup.py", FileCategory.CONFIG),
        ("Dockerfile", FileCategory.CONFIG),
        (".env", FileCategory.CONFIG),
        ("webpack.config.js", FileCategory.CONFIG),
        (".github/workflows/ci.yml", FileCategory.CONFIG),
        ("config.yaml", FileCategory.CONFIG),
        ("tox.ini", FileCategory.CONFIG),
        ("Dockerfile.dev", FileCategory.CONFIG),
        ("deploy/app.dockerfile", FileCategory.CONFIG),
        (".env.local", FileCategory.CONFIG),
        ("config/prod.env", FileCategory.CONFIG),
        # Core
        ("src/a.ts", FileCategory.CORE),
        ("src/config.ts", FileCategory.CORE),
        ("main.go", FileCategory.CORE),
        ("lib/parser.rb", FileCategory.CORE),
        ("App.kt", FileCategory.CORE),
        # Other
        ("logo.png", FileCategory.OTHER),
        ("Makefile", FileCategory.OTHER),
    ],
)
def test_categorize_file(path, expected):
    assert categorize_file(path) == expected


def test_docs_precede_config():
    """requirements.txt hits the docs extension before any config pattern."""
    assert categorize_file("requirements.txt") == FileCategory.DOCS


def test_case_insensitive():
    assert categorize_file("SRC/AUTH.TEST.TS") == FileCategory.TEST
    assert categorize_file("CHANGELOG.MD") == FileCategory.DOCS


def test_windows_separators():
    assert categorize_file("tests\\test_api.py") == FileCategory.TEST


def test_count_categories_covers_every_category():
    fragments = [
        ChangeFragment("a.py", ""),
        ChangeFragment("b.test.js", ""),
        ChangeFragment("package.json", ""),
    ]
    counts = count_categories(fragments)

    assert set(counts) == set(FileCategory)
    assert counts[FileCategory.CORE] == 1
    assert counts[FileCategory.TEST] == 1
    assert counts[FileCategory.CONFIG] == 1
    assert counts[FileCategory.DOCS] == 0
    assert sum(counts.values()) == len(fragments)
