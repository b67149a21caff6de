"""Command-line interface for translator-token.

Provides two subcommands:
    translator-token issue     – obtain a bearer token and print it
    translator-token endpoint  – print the issuance endpoint for a region
"""

import logging

import click

from translator_token import __version__
from translator_token.errors import TranslatorServiceError
from translator_token.provider import TokenProvider, authorization_url
from translator_token.settings import TranslatorSettings


def _setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root ``translator_token`` logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s - %(message)s"))
    app_logger = logging.getLogger("translator_token")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Silence noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="translator-token")
def cli() -> None:
    """Azure Translator access tokens."""


@cli.command()
@click.option("--key", "subscription_key", default=None, help="Translator subscription key.")
@click.option("--region", default=None, help="Azure region of the Translator resource.")
@click.option("--timeout", default=None, type=float, help="Request timeout in seconds.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging.",
)
def issue(
    subscription_key: str | None, region: str | None, timeout: float | None, verbose: bool
) -> None:
    """Obtain an access token and print the Authorization value."""
    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    settings = TranslatorSettings()
    if subscription_key is not None:
        settings.subscription_key = subscription_key.strip()
    if region is not None:
        settings.region = region.strip()
    if timeout is not None:
        settings.timeout = timeout

    with TokenProvider.from_settings(settings) as provider:
        try:
            token = provider.get_access_token()
        except TranslatorServiceError as exc:
            raise click.ClickException(exc.message) from exc
    click.echo(token)


@cli.command()
@click.option("--region", default=None, help="Azure region (global endpoint when omitted).")
def endpoint(region: str | None) -> None:
    """Print the token issuance endpoint for a region."""
    if region is None:
        region = TranslatorSettings().region
    click.echo(authorization_url(region))
