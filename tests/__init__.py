"""
Test suite for the HIV Treatment and Medical Services API.

Service tests run against a SQLite session; API tests go through TestClient.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
