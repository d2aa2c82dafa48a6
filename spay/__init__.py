"""
SPay Gateway Client

A client SDK for the SPay payment gateway: encrypts JSON requests with the
shared Triple-DES envelope, performs the HTTP exchange, and classifies the
gateway's responses into typed results or errors.
"""

__version__ = "0.1.0"
