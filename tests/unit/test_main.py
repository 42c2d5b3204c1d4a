"""Tests for application wiring in the entry point."""

from unittest.mock import AsyncMock, patch

import pytest
from telegram.ext import CommandHandler

from cmc_bot.config import Config
from cmc_bot.main import build_application, build_container
from cmc_bot.services.coinmarketcap import CoinMarketCapClient


def test_build_application_registers_commands() -> None:
    """start, help and price are registered as commands."""
    config = Config()
    app = build_application(config, build_container(config))

    commands = set()
    for handler in app.handlers[0]:
        assert isinstance(handler, CommandHandler)
        commands.update(handler.commands)

    assert commands == {"start", "help", "price"}


def test_container_uses_configured_client_settings() -> None:
    config = Config()

    client = build_container(config).market_data_client()

    assert isinstance(client, CoinMarketCapClient)
    assert client.base_url == config.market_data.base_url
    assert client.timeout.total == config.market_data.timeout


@pytest.mark.asyncio
async def test_post_shutdown_closes_client() -> None:
    """The shared HTTP session is released when the bot stops."""
    config = Config()
    container = build_container(config)
    app = build_application(config, container)

    with patch.object(CoinMarketCapClient, "close", AsyncMock()) as mock_close:
        await app.post_shutdown(app)

    mock_close.assert_awaited_once()
