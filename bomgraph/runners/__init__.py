"""Readers for bundler build output."""
