"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. The CoinMarketCap client is a singleton built
from configuration and injected into the command handlers, which keeps the
handlers testable without a live network.
"""

from dependency_injector import containers, providers

from cmc_bot.bot.handlers import PriceBotHandlers
from cmc_bot.bot.response_formatter import ResponseFormatter
from cmc_bot.services.coinmarketcap import CoinMarketCapClient


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Configuration()

    # Services
    market_data_client = providers.Singleton(
        CoinMarketCapClient,
        api_key=config.market_data.api_key,
        base_url=config.market_data.base_url,
        timeout=config.market_data.timeout,
    )

    # Bot components
    response_formatter = providers.Singleton(ResponseFormatter)
    handlers = providers.Singleton(
        PriceBotHandlers,
        client=market_data_client,
        formatter=response_formatter,
    )
