"""Market data services package.

Contains the CoinMarketCap API client, the response normalizer that turns
multi-listing payloads into one quote per symbol, and the error taxonomy
shared by both.
"""
