from __future__ import annotations

from relpkg.clients.registry import RegistryClient, publish_options_for
from relpkg.core.result import Err, Ok, Result
from relpkg.model.release_config import ReleaseConfig
from relpkg.output.console import ConsoleProtocol, Style
from relpkg.release.errors import ReleaseError


def ensure_registry_published(
    *,
    registry: RegistryClient,
    config: ReleaseConfig,
    version: str,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Make sure ``config.name@version`` is on the registry before bumping.

    Skipped entirely when registry publishing is disabled. A failing build is
    only a warning; a failing publish aborts the release.
    """
    if not config.registry_publish_enabled:
        console.info("NPM publish is disabled in configuration")
        return Ok(None)

    spec = f"{config.name}@{version}"
    options = publish_options_for(config.npm)
    if registry.version_exists(config.name, version, options.registry):
        console.success(f'NPM: Package "{spec}" already exists on npm')
        return Ok(None)

    console.info(f'Publishing "{spec}" to npm...')

    built = registry.build()
    if isinstance(built, Err):
        console.warning("Build failed, attempting to publish anyway...")
        if built.error.stderr.strip():
            console.print(built.error.stderr.strip(), Style.DIM)

    published = registry.publish(options)
    if isinstance(published, Err):
        return Err(
            ReleaseError(
                kind="publish_failed",
                message=f"npm publish failed for {spec}",
                hint=str(published.error),
            )
        )

    console.success(f'NPM: Successfully published "{spec}"')
    return Ok(None)
