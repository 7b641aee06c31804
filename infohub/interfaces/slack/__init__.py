"""Slack integration package for the Info Hub bot.

This package receives Slack Events API callbacks over HTTP, verifies their
signatures, deduplicates redeliveries and dispatches commands found in
mention text.

Entry point: infohub.interfaces.api.main (FastAPI application)
"""
