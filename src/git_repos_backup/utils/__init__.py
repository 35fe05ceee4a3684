"""Utilities for git-repos-backup."""
