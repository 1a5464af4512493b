"""
Notification Package

Delivery of the monthly summary to chat.
"""

from .slack import SlackNotifier

__all__ = ["SlackNotifier"]
