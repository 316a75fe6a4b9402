# cli.py
import click
import logging

from files_gateway.config.settings import configure_logging, get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for running and inspecting the files gateway"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  Telegram API URL: {settings.telegram_api_url}")
    print(f"  Bot Token: {settings.masked_bot_token}")
    print(f"  Chat ID: {settings.chat_id or '<unset>'}")
    print(f"  Max Upload Size: {settings.max_upload_size_bytes} bytes")
    print(f"  Request Timeout: {settings.request_timeout_seconds}s")
    print(f"  Log Level: {settings.log_level}")

    missing = settings.missing_credentials()
    if missing:
        print(f"❌ Missing required settings: {', '.join(missing)}")
    else:
        print("✅ Credentials configured")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to bind")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes (development)")
def serve(host, port, reload):
    """Run the gateway with uvicorn"""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.is_configured:
        logger.warning(f"Starting without {', '.join(settings.missing_credentials())}; requests will fail")

    uvicorn.run(
        "files_gateway.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
