"""Webhook inbound path for Lemon Squeezy.

Each webhook is signature-verified, filtered by event name, formatted
and fanned out to every configured chat channel.
"""
