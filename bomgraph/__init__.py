"""Build deduplicated SBOM dependency graphs from bundler module stats."""

__version__ = "0.1.0"
