"""Command-line interface."""

import json

import click

from .data_file_util_client import DataFileUtilClient
from .errors import FBAFileUtilError
from .fba_file_util import FBAFileUtil


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(package_name="fbafileutil")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Deployment config file (defaults to $KB_DEPLOYMENT_CONFIG).",
)
@click.option("--log-level", default="INFO", show_default=True)
@click.pass_context
def main(ctx: click.Context, config_file, log_level) -> None:
    """FBAFileUtil."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["log_level"] = log_level


def _service(ctx: click.Context) -> FBAFileUtil:
    try:
        return FBAFileUtil(
            config_file=ctx.obj["config_file"], log_level=ctx.obj["log_level"]
        )
    except FBAFileUtilError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Print the module status."""
    _echo_json(_service(ctx).status())


@main.command("sbml-to-model")
@click.argument("sbml_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--model-name", required=True)
@click.option("--workspace-name", required=True)
@click.option("--validate", is_flag=True, help="Validate the SBML first.")
@click.pass_context
def sbml_to_model(ctx, sbml_file, model_name, workspace_name, validate) -> None:
    """Upload an SBML file as an FBAModel."""
    service = _service(ctx)
    try:
        result = service.sbml_file_to_model(
            {
                "model_file": {"path": sbml_file},
                "model_name": model_name,
                "workspace_name": workspace_name,
            },
            validate=validate,
        )
    except FBAFileUtilError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(result)


@main.command("model-to-sbml")
@click.option("--model-name", required=True)
@click.option("--workspace-name", required=True)
@click.pass_context
def model_to_sbml(ctx, model_name, workspace_name) -> None:
    """Export an FBAModel to an SBML file."""
    service = _service(ctx)
    try:
        result = service.model_to_sbml_file(
            {"model_name": model_name, "workspace_name": workspace_name}
        )
    except FBAFileUtilError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(result)


@main.command("shock-to-file")
@click.argument("shock_id")
@click.argument("file_path", type=click.Path())
@click.option("--url", envvar="SDK_CALLBACK_URL", help="DataFileUtil URL.")
@click.option("--token", envvar="KB_AUTH_TOKEN")
@click.option("--check-interval-ms", default=5000, show_default=True, type=int)
@click.option("--timeout", type=float, default=None, help="Give up after N seconds.")
def shock_to_file(shock_id, file_path, url, token, check_interval_ms, timeout) -> None:
    """Download a Shock node to a local file."""
    client = DataFileUtilClient(
        url, token=token, async_job_check_time_ms=check_interval_ms
    )
    try:
        result = client.shock_to_file(
            {"shock_id": shock_id, "file_path": file_path}, timeout=timeout
        )
    except FBAFileUtilError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(result)


@main.command("file-to-shock")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--make-handle", is_flag=True)
@click.option("--gzip", "gzip_file", is_flag=True)
@click.option("--url", envvar="SDK_CALLBACK_URL", help="DataFileUtil URL.")
@click.option("--token", envvar="KB_AUTH_TOKEN")
@click.option("--check-interval-ms", default=5000, show_default=True, type=int)
@click.option("--timeout", type=float, default=None, help="Give up after N seconds.")
def file_to_shock(
    file_path, make_handle, gzip_file, url, token, check_interval_ms, timeout
) -> None:
    """Upload a local file to Shock."""
    client = DataFileUtilClient(
        url, token=token, async_job_check_time_ms=check_interval_ms
    )
    try:
        result = client.file_to_shock(
            {
                "file_path": file_path,
                "make_handle": int(make_handle),
                "gzip": int(gzip_file),
            },
            timeout=timeout,
        )
    except FBAFileUtilError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(result)


if __name__ == "__main__":
    main(prog_name="fbafileutil")  # pragma: no cover
