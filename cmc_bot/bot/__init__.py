"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command handlers,
localized message templates and quote formatting for user replies.
"""
