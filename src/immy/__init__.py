"""Immy: parenting coach API.

Account registration and login, profile retrieval, and the coach feed
for the children each account owns.
"""

__version__ = "0.1.0"
