"""
Pytest configuration for local imports and shared layouts.
"""

# Standard Library
import os
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


#============================================
@pytest.fixture
def finishing_layout() -> dict:
	"""
	Partial layout mapping with a 3 x 2 grid of 3.5 x 2 documents.
	"""
	return {
		"layout_area": {"origin_x": 0.25, "origin_y": 0.5},
		"document": {"width": 3.5, "height": 2.0},
		"gutter": {"horizontal": 0.125, "vertical": 0.25},
		"counts": {"across": 3, "down": 2},
	}


#============================================
@pytest.fixture
def business_card_payload() -> dict:
	"""
	Input JSON for the default 12 x 18 business-card job.
	"""
	return {
		"sheet": {"width": 12, "height": 18},
		"document": {"width": 3.5, "height": 2},
		"gutter": {"horizontal": 0.125, "vertical": 0.125},
		"margins": {"top": 0, "right": 0, "bottom": 0, "left": 0},
		"non_printable": {"top": 0.0625, "right": 0.0625, "bottom": 0.0625, "left": 0.0625},
	}
