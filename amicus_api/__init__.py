"""
Amicus Subscription API

Accepts email/SMS subscription requests and records them in the hosted
subscriptions table.
"""

__version__ = "0.1.0"
