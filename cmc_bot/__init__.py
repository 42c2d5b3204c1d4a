"""CoinMarketCap Price Bot Application Package.

A Telegram bot that fetches cryptocurrency quotes from the CoinMarketCap Pro
API and replies with a formatted price summary.

The application follows a modular architecture with separate concerns for:
- Bot handlers and message formatting
- Market data API access and failure classification
- Normalization of multi-listing API responses
"""
