"""
                Food Delivery Platform

Backend for a food ordering platform: customer and restaurant owner
accounts, admin approval of restaurant owners, and cart assembly.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
