import click


@click.group()
def main() -> None:
    """Shipwright - deployment command environment builder."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from SHIPWRIGHT_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from SHIPWRIGHT_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the service hook server."""
    import uvicorn

    from shipwright.deploy_runtime.settings import ShipwrightSettings

    settings = ShipwrightSettings()

    uvicorn.run(
        "shipwright.deploy_runtime.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


def _parse_assignments(values: tuple[str, ...]) -> dict[str, str]:
    result: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got '{item}'"
            raise click.BadParameter(msg, param_hint="--set")
        result[key] = value
    return result


@main.command()
@click.option("--working-dir", default=None, help="Working directory (default: the source path).")
@click.option("--source", default=None, help="Deployment source (default: the site repository path).")
@click.option("--target", default=None, help="Deployment target (default: the site web root).")
@click.option("--command", "command_path", default=None, help="Describe a generic command instead of the starter.")
@click.option("--idle-timeout", default=None, type=int, help="Idle timeout in seconds for --command.")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Deployment setting override.")
@click.option("--no-deployment-file", is_flag=True, default=False, help="Ignore the source's .deployment file.")
def describe(
    working_dir: str | None,
    source: str | None,
    target: str | None,
    command_path: str | None,
    idle_timeout: int | None,
    assignments: tuple[str, ...],
    no_deployment_file: bool,
) -> None:
    """Print the launch descriptor a deployment would use, as JSON."""
    import json
    from datetime import timedelta

    from shipwright.deploy_runtime.execution.builder import ConfigurationMissingError, ExternalCommandBuilder
    from shipwright.deploy_runtime.log import setup_logging
    from shipwright.deploy_runtime.models.host import HostEnvironment
    from shipwright.deploy_runtime.providers import (
        DeploymentFileError,
        DeploymentSettingsManager,
        HostToolLocator,
        InvalidSettingError,
        load_deployment_file,
    )
    from shipwright.deploy_runtime.settings import ShipwrightSettings

    settings = ShipwrightSettings()
    setup_logging(settings.log_level)

    host = HostEnvironment.from_settings(settings)
    source = source or host.repository_path
    target = target or host.web_root_path

    overrides = _parse_assignments(assignments)
    tools = HostToolLocator(
        node_versions_root=settings.node_versions_root,
        npm_global_prefix=settings.npm_global_prefix,
    )

    try:
        file_values = {} if no_deployment_file else load_deployment_file(source)
        deployment_settings = DeploymentSettingsManager.from_sources(
            overrides,
            file_values,
            default_idle_timeout=timedelta(seconds=settings.command_idle_timeout),
        )
        builder = ExternalCommandBuilder(host, deployment_settings, tools)

        if command_path:
            timeout = (
                timedelta(seconds=idle_timeout) if idle_timeout is not None else deployment_settings.get_idle_timeout()
            )
            descriptor = builder.build_command(command_path, working_dir or source, timeout)
        else:
            descriptor = builder.build_starter_command(working_dir or source, target, source)
    except (ConfigurationMissingError, DeploymentFileError, InvalidSettingError) as exc:
        raise click.ClickException(str(exc)) from None

    click.echo(json.dumps(descriptor.as_dict(), indent=2))


if __name__ == "__main__":
    main()
