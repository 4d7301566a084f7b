"""
Configuration file for pytest.
"""
import os
import sys

# Tests import the clob package straight from the repository root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
