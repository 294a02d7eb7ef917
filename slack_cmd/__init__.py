"""Slack command line client: post messages and upload files to joined channels."""

__version__ = "0.1.0"
