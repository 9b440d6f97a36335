"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

FIXTURES_DIR = pathlib.Path(__file__).parent / "fixtures"


#============================================
@pytest.fixture
def showcase_markdown() -> str:
	"""
	Markdown body exercising every block type.
	"""
	return (FIXTURES_DIR / "showcase.md").read_text(encoding="utf-8")


#============================================
@pytest.fixture
def report_builder():
	"""
	Fresh report builder with the default white theme.
	"""
	import mdreport.builder
	import mdreport.config

	return mdreport.builder.DocumentBuilder(mdreport.config.report_geometry())
