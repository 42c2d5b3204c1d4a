"""Telegram bot message templates and constants.

Contains all user-facing message templates in Russian, error prefixes, and
formatting constants for quote replies. Centralizes message management for
easy localization and consistent user experience across commands.
"""

# Bot commands and descriptions
START_MESSAGE = (
    "👋 Привет! Я бот для получения котировок криптовалют.\n\n"
    "Доступные команды:\n"
    "/price <символ> - получить цену криптовалюты (например: /price BTC)\n"
    "/price <символ1,символ2,...> - получить цены нескольких криптовалют "
    "(например: /price BTC,ETH,BNB)\n"
    "/help - показать эту справку"
)

HELP_MESSAGE = (
    "📖 Справка по командам:\n\n"
    "/price <символ> - получить цену одной криптовалюты\n"
    "Пример: /price BTC\n\n"
    "/price <символ1,символ2,...> - получить цены нескольких криптовалют\n"
    "Пример: /price BTC,ETH,BNB\n\n"
    "/help - показать эту справку"
)

PRICE_USAGE_MESSAGE = (
    "❌ Пожалуйста, укажите символ(ы) криптовалюты.\n"
    "Пример: /price BTC или /price BTC,ETH,BNB"
)

LOADING_MESSAGE = "⏳ Загружаю данные..."

# Error messages
ERROR_PREFIX = "❌ Ошибка при получении данных: "
ERROR_UNEXPECTED = "❌ Произошла ошибка при получении данных. Попробуйте позже."

# Single quote format
QUOTE_HEADER = "💰 *{name} ({symbol})*"
QUOTE_PRICE_LINE = "💵 Цена: ${price}"
QUOTE_CHANGE_LINE = "📊 Изменение за 24ч: {change}"
QUOTE_MARKET_CAP_LINE = "📈 Рыночная капитализация: ${market_cap}"
QUOTE_VOLUME_LINE = "💹 Объем за 24ч: ${volume}"

# Multiple quotes format
QUOTES_LIST_HEADER = "💰 *Котировки криптовалют:*"
QUOTES_LIST_LINE = "• *{symbol}* - ${price} ({change})"

# Percent change markers
CHANGE_UP_PREFIX = "📈 +"
CHANGE_DOWN_PREFIX = "📉 "
