"""
Test suite for the CLOB client.

Run all tests from project root:
    pytest
    pytest tests/test_clob/

Run specific test file:
    pytest tests/test_clob/test_headers.py

Run with coverage:
    pytest --cov=clob --cov-report=html
"""
