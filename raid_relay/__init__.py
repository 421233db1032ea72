"""Relay raid completion reports from guild members to a Discord webhook."""
