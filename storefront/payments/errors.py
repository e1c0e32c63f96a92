"""
Erreurs métier du checkout.

Chaque erreur est une HTTPException (status_code + message) afin d'être levée
directement depuis la couche service, comme le reste du backend.
Le rendu JSON ({success: false, message[, error]}) est fait par
storefront.app_setup.exceptions.
"""
from typing import Any, Optional
from fastapi import HTTPException


class CheckoutError(HTTPException):
    status_code = 500
    message = "Checkout failed"

    def __init__(self, message: Optional[str] = None, error: Any = None):
        self.message = message or self.message
        self.error = error
        super().__init__(status_code=self.status_code, detail=self.message)

    def to_body(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


# --- 400: entrée client invalide (aucun appel externe effectué) ---

class MissingIdentity(CheckoutError):
    status_code = 400
    message = "User ID is required"


class MissingPaymentToken(CheckoutError):
    status_code = 400
    message = "Payment nonce is required"


class MissingCart(CheckoutError):
    status_code = 400
    message = "Cart is required"


class EmptyCart(CheckoutError):
    status_code = 400
    message = "Cart is empty"


class InvalidCartItem(CheckoutError):
    status_code = 400
    message = "Invalid cart item"


# --- 5xx: passerelle / persistance ---

class GatewayTransactionError(CheckoutError):
    status_code = 502
    message = "Payment transaction failed"


class GatewayUnavailable(CheckoutError):
    status_code = 500
    message = "Payment gateway unavailable"


class OrderPersistenceError(CheckoutError):
    status_code = 500
    message = "Error in saving order"


class TokenGenerationError(CheckoutError):
    status_code = 500
    message = "Error in generating token"
