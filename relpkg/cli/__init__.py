"""Command-line entry points: ``release-package`` and ``release-package-schema``."""
