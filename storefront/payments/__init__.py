"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, client Braintree, erreurs métier et services.
"""

from .cart import compute_amount, format_total, invalid_lines, line_total
from .braintree_client import SaleResult, sale, to_sale_result
from .errors import (
    CheckoutError,
    MissingIdentity,
    MissingPaymentToken,
    MissingCart,
    EmptyCart,
    InvalidCartItem,
    GatewayTransactionError,
    GatewayUnavailable,
    OrderPersistenceError,
    TokenGenerationError,
)
from .service import submit_payment, validate_payment_request

__all__ = [
    # cart
    "compute_amount",
    "format_total",
    "invalid_lines",
    "line_total",
    # braintree
    "SaleResult",
    "sale",
    "to_sale_result",
    # errors
    "CheckoutError",
    "MissingIdentity",
    "MissingPaymentToken",
    "MissingCart",
    "EmptyCart",
    "InvalidCartItem",
    "GatewayTransactionError",
    "GatewayUnavailable",
    "OrderPersistenceError",
    "TokenGenerationError",
    # services
    "submit_payment",
    "validate_payment_request",
]
