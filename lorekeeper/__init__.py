"""Lorekeeper: release notes from the pull requests merged since the previous release."""
