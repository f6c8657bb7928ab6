"""Test helpers shared across catprep tests."""
