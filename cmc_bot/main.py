"""Application entry point.

Main module that initializes and runs the Telegram bot application in
long-polling mode. Validates required environment variables at startup,
configures logging and registers command handlers.
"""

import logging

from telegram.ext import Application, CommandHandler

from .config import Config, ConfigError
from .core.container import Container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
# httpx logs full request URLs, which include the bot token
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def load_config() -> Config:
    """Load configuration or stop the process.

    Returns:
        Fully populated configuration.

    Raises:
        SystemExit: If a required environment variable is missing.
    """
    try:
        return Config()
    except ConfigError as e:
        logger.critical(str(e))
        raise SystemExit(str(e)) from e


def build_container(config: Config) -> Container:
    """Create the DI container from loaded configuration."""
    container = Container()
    container.config.from_dict(
        {
            "market_data": {
                "api_key": config.market_data.api_key,
                "base_url": config.market_data.base_url,
                "timeout": config.market_data.timeout,
            }
        }
    )
    return container


def build_application(config: Config, container: Container) -> Application:
    """Create the bot application and register command handlers."""
    async def post_shutdown(application: Application) -> None:
        await container.market_data_client().close()

    app = Application.builder().token(config.bot.bot_token).post_shutdown(post_shutdown).build()
    handlers = container.handlers()

    app.add_handler(CommandHandler("start", handlers.start))
    app.add_handler(CommandHandler("help", handlers.help_command))
    app.add_handler(CommandHandler("price", handlers.price))
    return app


def main() -> None:
    """Main application entry point.

    Loads configuration, wires the market data client into the handlers and
    starts long polling.

    Raises:
        SystemExit: If TELEGRAM_BOT_TOKEN or COINMARKETCAP_API_KEY is not set.
    """
    config = load_config()
    logging.getLogger().setLevel(config.bot.log_level.upper())

    container = build_container(config)
    app = build_application(config, container)

    logger.info("Бот запущен и готов к работе!")
    app.run_polling(timeout=config.bot.polling_timeout)


if __name__ == "__main__":
    main()
