"""
Main CLI entry point for Lifeline.

Provides the command-line interface using Click.
"""

import asyncio as _asyncio
import json as _json
import logging as _logging
import typing as _typing

import click as _click

import lifeline
import lifeline.api as api
import lifeline.config as config

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

PROVIDER_CHOICE = _click.Choice(list(api.PROVIDER_IDS))


def _run_async(coro: _typing.Coroutine[_typing.Any, _typing.Any, _typing.Any]) -> _typing.Any:
    """Run an async coroutine synchronously."""
    return _asyncio.run(coro)


def _configure_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    _logging.basicConfig(
        level=getattr(_logging, level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs at INFO, and Gemini takes the key in the URL
    _logging.getLogger("httpx").setLevel(_logging.WARNING)


def _load_settings() -> config.Settings:
    try:
        return config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from None


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(lifeline.__version__, "-v", "--version", prog_name="lifeline")
@_click.option("--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """Lifeline - ask a first-aid question to your preferred AI provider."""
    settings = _load_settings()
    _configure_logging("debug" if verbose else settings.logging.level)
    ctx.obj = settings


@cli.command()
@_click.argument("prompt")
@_click.option(
    "--provider",
    type=PROVIDER_CHOICE,
    default=None,
    help="Provider to use (defaults to the saved selection)",
)
@_click.pass_obj
def ask(settings: config.Settings, prompt: str, provider: str | None) -> None:
    """Send PROMPT to the AI provider and print the answer."""

    async def _ask() -> str:
        async with api.create_dispatcher(settings) as dispatcher:
            return await dispatcher.call_ai(prompt, provider)

    try:
        text = _run_async(_ask())
    except api.LifelineAPIError as e:
        _click.echo(str(e), err=True)
        raise SystemExit(1) from None
    _click.echo(text)


@cli.group()
def provider() -> None:
    """Show or change the selected provider."""


@provider.command("show")
@_click.pass_obj
def provider_show(settings: config.Settings) -> None:
    """Show the selected provider."""
    store = api.create_preference_store(settings)
    lookup = store.load_selected_provider()
    provider_config = api.get_provider_config(lookup.provider)
    suffix = " (default)" if lookup.is_default else ""
    _click.echo(f"{provider_config.id}: {provider_config.display_name}{suffix}")


@provider.command("set")
@_click.argument("provider_id", type=PROVIDER_CHOICE)
@_click.pass_obj
def provider_set(settings: config.Settings, provider_id: str) -> None:
    """Select PROVIDER_ID for future requests."""
    store = api.create_preference_store(settings)
    if not store.set_selected_provider(provider_id):  # type: ignore[arg-type]
        raise _click.ClickException(
            f"Could not save selection to {settings.preferences_path}"
        )
    _click.echo(f"Selected {api.get_provider_config(provider_id).display_name}")


@cli.command()
@_click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@_click.pass_obj
def providers(settings: config.Settings, json_output: bool) -> None:
    """List supported providers and whether a key is configured."""
    store = api.create_preference_store(settings)
    selected = store.get_selected_provider()

    rows: list[dict[str, _typing.Any]] = []
    for provider_id in api.PROVIDER_IDS:
        provider_config = api.get_provider_config(provider_id)
        rows.append({
            "id": provider_id,
            "name": provider_config.display_name,
            "default_model": provider_config.default_model,
            "models": list(provider_config.candidate_models),
            "key_env_var": store.env_var_for(provider_id),
            "key_configured": store.get_credential(provider_id) is not None,
            "selected": provider_id == selected,
        })

    if json_output:
        _click.echo(_json.dumps(rows, indent=2))
        return

    for row in rows:
        marker = "*" if row["selected"] else " "
        key_status = "key configured" if row["key_configured"] else f"no key ({row['key_env_var']})"
        _click.echo(
            f"{marker} {row['id']:<9} {row['name']:<18} {row['default_model']:<18} {key_status}"
        )


@cli.command("config")
@_click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@_click.pass_obj
def show_config(settings: config.Settings, json_output: bool) -> None:
    """Show effective configuration."""
    data = settings.to_dict()
    if json_output:
        _click.echo(_json.dumps(data, indent=2))
        return

    _click.echo(f"Config Dir:        {data['config_dir']}")
    _click.echo(f"Preferences File:  {data['preferences_file']}")
    _click.echo(f"Credentials File:  {data['credentials_file'] or '(preferences file)'}")
    _click.echo(f"Key Env Prefix:    {data['credentials_env_prefix']}")
    _click.echo(f"HTTP Timeout:      {data['http_timeout']}s")
    _click.echo(f"Log Level:         {data['log_level']}")

    extras = settings.collect_all_extra_fields()
    if extras:
        _click.echo("Unknown settings:  " + ", ".join(sorted(extras)))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
