"""Telegram bot command handlers.

Handlers for /start, /help and /price. The market data client and the
response formatter are injected into PriceBotHandlers, so handlers hold no
global state and can be tested without network access.
"""

import logging

from telegram import Message, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..services.coinmarketcap import CoinMarketCapClient, sanitize_symbols
from ..services.errors import MarketDataError
from .messages import (
    ERROR_UNEXPECTED,
    HELP_MESSAGE,
    LOADING_MESSAGE,
    PRICE_USAGE_MESSAGE,
    START_MESSAGE,
)
from .response_formatter import ResponseFormatter

logger = logging.getLogger(__name__)


class PriceBotHandlers:
    """Command handlers bound to a market data client."""

    def __init__(self, client: CoinMarketCapClient, formatter: ResponseFormatter) -> None:
        """Initialize handlers.

        Args:
            client: Shared CoinMarketCap client.
            formatter: Formatter for quote and error replies.
        """
        self.client = client
        self.formatter = formatter

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start command.

        Sends welcome message with the list of available commands.

        Args:
            update: Telegram update object containing message data.
            context: Bot context for accessing application instance.
        """
        if update.message:
            await update.message.reply_text(START_MESSAGE)

    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /help command."""
        if update.message:
            await update.message.reply_text(HELP_MESSAGE)

    async def price(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /price command for one or more symbols.

        Command arguments are joined with commas, so both "/price BTC,ETH"
        and "/price BTC ETH" request two symbols. Replies with a usage hint
        without calling the API when no symbol is given.

        Args:
            update: Telegram update object containing message data.
            context: Bot context with parsed command arguments.
        """
        message = update.message
        if message is None:
            return

        user = update.effective_user
        user_id = user.id if user else None
        username = user.username if user else None

        symbols = ",".join(context.args or [])
        if not sanitize_symbols(symbols):
            logger.info(f"User {user_id} (@{username}) requested /price without symbols")
            await message.reply_text(PRICE_USAGE_MESSAGE)
            return

        logger.info(f"User {user_id} (@{username}) requested quotes for: {symbols}")
        loading_message = await message.reply_text(LOADING_MESSAGE)

        try:
            quotes = await self.client.get_quotes(symbols)
        except MarketDataError as e:
            logger.error(
                f"Failed to get quotes for user {user_id} (@{username}), "
                f"symbols: {symbols}, error: {e.message}"
            )
            await _delete_quietly(loading_message)
            await message.reply_text(self.formatter.format_error(e))
            return
        except Exception as e:
            logger.exception(f"Unexpected error while getting quotes for {symbols}: {e}")
            await _delete_quietly(loading_message)
            await message.reply_text(ERROR_UNEXPECTED)
            return

        logger.info(f"Quotes delivered to user {user_id} (@{username}), count: {len(quotes)}")

        response = self.formatter.format_quotes(quotes)
        await _delete_quietly(loading_message)
        await message.reply_text(response, parse_mode=ParseMode.MARKDOWN)


async def _delete_quietly(message: Message) -> None:
    """Delete a service message, logging instead of raising on failure."""
    try:
        await message.delete()
    except TelegramError as e:
        logger.warning(f"Failed to delete loading message: {e}")
