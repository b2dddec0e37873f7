import asyncio
import json
from typing import Annotated, Any

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from apidisco.client.builder import ClientBuilder
from apidisco.client.tree import ClientTree
from apidisco.config import ClientConfig, get_config
from apidisco.exceptions import ApiDiscoError

console = Console()
app = typer.Typer(
    name='apidisco',
    help='Discover Swagger-style APIs and call their operations',
    no_args_is_help=True,
)

ConfigOption = Annotated[
    str | None,
    typer.Option('--config', '-c', help='Path to configuration file (YAML)'),
]
DiscoveryUrlOption = Annotated[
    str | None,
    typer.Option('--discovery-url', help='URL of the root discovery document'),
]
ApiBaseOption = Annotated[
    str | None,
    typer.Option('--api-base', help='Prefix of every request URL'),
]
HeaderOption = Annotated[
    list[str] | None,
    typer.Option('--header', '-H', help='Extra request header as "Name: value"'),
]


def parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition(':')
    if not sep or not name.strip():
        raise typer.BadParameter(f'Invalid header {value!r}, expected "Name: value"')
    return name.strip(), header_value.strip()


def parse_argument(value: str) -> Any:
    """Decode a command line argument as JSON, falling back to the raw string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def resolve_config(
    config: str | None,
    discovery_url: str | None,
    api_base: str | None,
    headers: list[str] | None,
) -> ClientConfig:
    """Combine the configuration file (if needed) with command line overrides."""
    extra_headers = dict(parse_header(header) for header in headers or [])

    if discovery_url and api_base and not config:
        return ClientConfig(
            discovery_url=discovery_url, api_base=api_base, headers=extra_headers
        )

    resolved = get_config(config)
    update: dict[str, Any] = {'headers': {**resolved.headers, **extra_headers}}
    if discovery_url:
        update['discovery_url'] = discovery_url
    if api_base:
        update['api_base'] = api_base
    return resolved.model_copy(update=update)


def discover(config: ClientConfig) -> ClientTree:
    with Progress(
        SpinnerColumn(),
        TextColumn('[progress.description]{task.description}'),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f'Discovering {config.discovery_url}...', total=None)
        return asyncio.run(ClientBuilder.from_config(config).build())


@app.command()
def docs(
    config: ConfigOption = None,
    discovery_url: DiscoveryUrlOption = None,
    api_base: ApiBaseOption = None,
    header: HeaderOption = None,
) -> None:
    """Print every discovered operation with its call signature.

    Examples:
        apidisco docs --discovery-url https://api.example.com/api-docs --api-base https://api.example.com
        apidisco docs -c apidisco.yaml
    """
    try:
        resolved = resolve_config(config, discovery_url, api_base, header)
        tree = discover(resolved)
    except ApiDiscoError as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)

    console.print(ClientTree.format_docs(tree), markup=False, highlight=False)


@app.command()
def call(
    group: Annotated[str, typer.Argument(help='Group name, e.g. users')],
    operation: Annotated[str, typer.Argument(help='Operation name, e.g. getUser')],
    args: Annotated[
        list[str] | None,
        typer.Argument(help='Call arguments; JSON values are decoded'),
    ] = None,
    config: ConfigOption = None,
    discovery_url: DiscoveryUrlOption = None,
    api_base: ApiBaseOption = None,
    header: HeaderOption = None,
) -> None:
    """Call one discovered operation and print its response.

    Examples:
        apidisco call users getUser 42
        apidisco call users listUsers '{"limit": 10}'
    """
    try:
        resolved = resolve_config(config, discovery_url, api_base, header)
        tree = discover(resolved)
        try:
            method = tree[group][operation]
        except KeyError:
            raise typer.BadParameter(f"Unknown operation '{group}.{operation}'")
        result = asyncio.run(method(*[parse_argument(arg) for arg in args or []]))
    except ApiDiscoError as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)

    if isinstance(result, httpx.Response):
        console.print(result.text, markup=False, highlight=False)
    else:
        console.print_json(data=result)


@app.command()
def version() -> None:
    """Show the version of apidisco."""
    from apidisco import __version__

    console.print(f'apidisco version: {__version__}')


if __name__ == '__main__':
    app()
