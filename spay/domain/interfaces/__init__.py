"""
Domain Interfaces (Ports)
"""

from .clients import PaymentGatewayClient, InflowRequeryClient

__all__ = [
    "PaymentGatewayClient",
    "InflowRequeryClient",
]
