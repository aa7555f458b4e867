"""Tests for lorekeeper."""
