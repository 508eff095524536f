"""Relay Retell function-call webhooks to the Textable SMS API."""

from dotenv import load_dotenv

load_dotenv()

__version__ = "0.1.0"
