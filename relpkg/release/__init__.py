"""Release run: preflight checks, registry publishing, commit/tag and reporting."""
