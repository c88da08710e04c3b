"""
Foody API end-to-end testing toolkit

Token-authenticated REST client, DTOs and test helpers for the Foody
food-review service.
"""

__version__ = "1.0.0"
