"""
Cas d'usage 'payments': orchestre validation, montant, Braintree et commande.

Séquence de submit_payment:
  1) validation (identité, nonce, panier présent, non vide, lignes débitables) -> 400
  2) montant = somme price * (quantity ou 1)
  3) vente Braintree (submit_for_settlement) -> 502 si refus, 500 si SDK KO
  4) enregistrement de la commande -> 500 si échec (aucun remboursement)
Aucun retry, aucune clé d'idempotence: un double envoi produit deux ventes.
"""
import logging
from typing import Any, Dict, List, Optional

from . import braintree_client
from . import cart as cart_logic
from .errors import (
    EmptyCart,
    GatewayTransactionError,
    GatewayUnavailable,
    InvalidCartItem,
    MissingCart,
    MissingIdentity,
    MissingPaymentToken,
    OrderPersistenceError,
    TokenGenerationError,
)
from storefront.orders import repository as orders_repository
from storefront.orders.models import build_order

logger = logging.getLogger(__name__)

# module storefront.payments.service
def generate_client_token() -> Dict[str, Any]:
    """Token client Braintree: {"success": True, "clientToken": "..."}."""
    try:
        token = braintree_client.generate_client_token()
    except Exception as e:
        logger.exception("payments.service.generate_client_token failed")
        raise TokenGenerationError(error=str(e))
    return {"success": True, "clientToken": token}


def validate_payment_request(user_id: Optional[str], nonce: Optional[str], cart: Any) -> List[Dict[str, Any]]:
    """
    Contrôles d'entrée, dans l'ordre, sans effet de bord.
    Retourne une copie du panier (instantané) si tout est valide.
    """
    if not user_id:
        raise MissingIdentity()
    if not nonce:
        raise MissingPaymentToken()
    if cart is None or not isinstance(cart, (list, tuple)):
        raise MissingCart()
    if len(cart) == 0:
        raise EmptyCart()
    invalid = cart_logic.invalid_lines(cart)
    if invalid:
        logger.warning("payments.service.validate_payment_request lignes invalides user_id=%s index=%s", user_id, invalid)
        raise InvalidCartItem(error={"lines": invalid})
    return list(cart)


def submit_payment(user_id: Optional[str], nonce: Optional[str], cart: Any) -> Dict[str, bool]:
    snapshot = validate_payment_request(user_id, nonce, cart)
    amount = cart_logic.compute_amount(snapshot)

    try:
        result = braintree_client.sale(amount=amount, nonce=nonce)
    except Exception as e:
        logger.exception("payments.service.submit_payment gateway unavailable user_id=%s amount=%s", user_id, amount)
        raise GatewayUnavailable(error=str(e))

    if not result.success:
        logger.error(
            "payments.service.submit_payment transaction refused user_id=%s amount=%s message=%s",
            user_id, amount, result.message,
        )
        raise GatewayTransactionError(error=result.message)

    order = build_order(products=snapshot, buyer=user_id, payment=result.to_payment())
    try:
        orders_repository.insert_order(order)
    except Exception as e:
        # Vente déjà réglée: aucune compensation à ce niveau
        logger.critical(
            "payments.service.submit_payment order not saved after settlement user_id=%s transaction_id=%s",
            user_id, result.transaction_id,
        )
        raise OrderPersistenceError(error=str(e))

    logger.info(
        "payments.service.submit_payment ok user_id=%s items=%s amount=%s transaction_id=%s",
        user_id, len(snapshot), amount, result.transaction_id,
    )
    return {"ok": True}
