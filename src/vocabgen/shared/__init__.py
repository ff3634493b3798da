"""Shared types used across the generator."""
