"""
Contact Relay CLI - Command line interface for running and checking the service.

Usage:
    contact-relay --help              Show all commands
    contact-relay serve               Run the API with uvicorn
    contact-relay check-config        Show mail, CORS and rate limit configuration
    contact-relay send-test           Send a sample submission through the mail provider
"""

import asyncio

import typer

app = typer.Typer(
    name="contact-relay",
    help="Contact Relay CLI - contact form email relay",
    no_args_is_help=True,
)


# --- Step printer helpers ---


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_warning(message: str) -> None:
    """Print a warning message."""
    typer.echo(f"  ⚠️ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server."""
    import uvicorn

    from app.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@app.command("check-config")
def check_config() -> None:
    """Show the effective configuration without sending anything."""
    from app.config import get_config, get_settings
    from pydantic import ValidationError

    from app.core.cors import OriginAllowList
    from app.services.mail import build_mail_sender

    try:
        settings = get_settings()
    except ValidationError as e:
        _print_error(f"Invalid configuration:\n{e}")
        raise typer.Exit(1) from e
    config = get_config()
    sender = build_mail_sender(settings)

    typer.echo("\nMail")
    if sender.is_configured:
        _print_success(f"Provider: {sender.provider_name}")
    else:
        _print_warning("No mail provider configured - submissions will be logged only")
    typer.echo(f"  Recipient: {settings.to_email or sender.default_recipient or 'not set'}")
    typer.echo(f"  Send timeout: {settings.mail_send_timeout_seconds}s")

    typer.echo("\nCORS")
    try:
        allow_list = OriginAllowList.from_entries(settings.allowed_origin_list)
    except ValueError as e:
        _print_error(str(e))
        raise typer.Exit(1) from e
    for origin in settings.allowed_origin_list:
        typer.echo(f"  • {origin}")
    if not len(allow_list):
        _print_warning("No origins allowed - browsers cannot call the API")

    typer.echo("\nForm")
    typer.echo(f"  Subject prefix: {config.contact.subject_prefix}")
    typer.echo(f"  Message limit: {settings.message_max_length} characters")
    typer.echo(f"  Rate limit: {settings.rate_limit_description}")
    typer.echo(f"  Display timezone: {settings.display_timezone or 'server local time'}")


@app.command("send-test")
def send_test(
    to: str | None = typer.Option(None, "--to", help="Override the recipient address"),
) -> None:
    """Send a sample contact message through the configured provider."""
    from app.config import get_config, get_settings
    from app.services.contact import ContactSubmissionHandler, render_contact_email
    from app.services.mail import build_mail_sender

    settings = get_settings()
    sender = build_mail_sender(settings)
    if not sender.is_configured:
        _print_error("No mail provider configured (set RESEND_API_KEY, SMTP_* or GMAIL_*)")
        raise typer.Exit(1)

    handler = ContactSubmissionHandler(
        sender=sender, settings=settings, config=get_config().contact
    )
    rendered = render_contact_email(
        "Contact Relay",
        settings.to_email or sender.default_recipient or "test@localhost.localdomain",
        "This is a test message from the contact-relay CLI.\nIf you can read this, delivery works.",
        config=handler.config,
        provider=sender.provider_name,
        timezone=settings.display_timezone,
    )
    message = handler.build_message(
        reply_to=None,
        subject=rendered.subject,
        text=rendered.text,
        html=rendered.html,
    )
    if to:
        message.to = to

    typer.echo(f"Sending test email via {sender.provider_name} to {message.to}...")
    outcome = asyncio.run(sender.send(message))

    if outcome.delivered:
        _print_success(f"Sent (message id: {outcome.message_id or 'n/a'})")
    else:
        _print_error(f"{outcome.status.value}: {outcome.reason}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
