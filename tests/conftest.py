"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

# Add src to Python path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Headless Qt for widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "minimal")
