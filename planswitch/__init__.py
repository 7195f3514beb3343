"""
planswitch

View and change the subscription plan of an account on a hosted service.
"""

__version__ = "0.1.0"
