"""GitHub access through githubkit."""
