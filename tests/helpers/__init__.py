"""Test helper modules.

- fake_api: scripted APIWrapper stand-in that records requests
"""

from .fake_api import FakeAPI, make_response

__all__ = [
    'FakeAPI',
    'make_response',
]
