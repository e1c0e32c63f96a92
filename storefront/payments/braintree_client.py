"""
Adaptateur Braintree: centralise la configuration et les appels au SDK.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

import braintree

from storefront.config import (
    BRAINTREE_ENVIRONMENT,
    BRAINTREE_MERCHANT_ID,
    BRAINTREE_PUBLIC_KEY,
    BRAINTREE_PRIVATE_KEY,
)

_ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
    "development": braintree.Environment.Development,
}

_gateway: Optional[braintree.BraintreeGateway] = None

# module storefront.payments.braintree_client
class SaleResult:
    """Issue d'une vente, indépendante des objets du SDK."""

    def __init__(
        self,
        success: bool,
        transaction: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.success = success
        self.transaction = transaction
        self.message = message
        self.errors = errors or []

    @property
    def transaction_id(self) -> Optional[str]:
        return (self.transaction or {}).get("id")

    def to_payment(self) -> Dict[str, Any]:
        """Structure stockée dans order.payment (flag succès + métadonnées de transaction)."""
        payment: Dict[str, Any] = {"success": self.success, "transaction": self.transaction}
        if not self.success:
            payment["message"] = self.message
            payment["errors"] = self.errors
        return payment


def get_gateway() -> braintree.BraintreeGateway:
    """
    Construit (une seule fois) la passerelle Braintree à partir de la config.
    - BRAINTREE_ENVIRONMENT inconnu => sandbox.
    - Sans identifiants, les appels échoueront côté SDK (AuthenticationError).
    """
    global _gateway
    if _gateway is None:
        environment = _ENVIRONMENTS.get(BRAINTREE_ENVIRONMENT, braintree.Environment.Sandbox)
        _gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment,
                merchant_id=BRAINTREE_MERCHANT_ID,
                public_key=BRAINTREE_PUBLIC_KEY,
                private_key=BRAINTREE_PRIVATE_KEY,
            )
        )
    return _gateway


def generate_client_token() -> str:
    """Token client pour le widget Drop-in (les exceptions du SDK remontent)."""
    return get_gateway().client_token.generate()


def format_amount(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(Decimal("0.01")))


def sale(*, amount: Decimal, nonce: str) -> SaleResult:
    """
    Soumet une vente avec settlement immédiat.
    - Retour: SaleResult (succès ou erreur signalée par la passerelle)
    - Les exceptions du SDK (réseau, config, auth) ne sont pas converties.
    """
    result = get_gateway().transaction.sale({
        "amount": format_amount(amount),
        "payment_method_nonce": nonce,
        "options": {"submit_for_settlement": True},
    })
    return to_sale_result(result)


def _serialize_transaction(transaction: Any) -> Optional[Dict[str, Any]]:
    if transaction is None:
        return None
    created_at = getattr(transaction, "created_at", None)
    amount = getattr(transaction, "amount", None)
    return {
        "id": getattr(transaction, "id", None),
        "status": getattr(transaction, "status", None),
        "type": getattr(transaction, "type", None),
        "amount": str(amount) if amount is not None else None,
        "currency_iso_code": getattr(transaction, "currency_iso_code", None),
        "processor_response_code": getattr(transaction, "processor_response_code", None),
        "processor_response_text": getattr(transaction, "processor_response_text", None),
        "created_at": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
    }


def _serialize_errors(result: Any) -> List[Dict[str, Any]]:
    errors = getattr(result, "errors", None)
    deep_errors = getattr(errors, "deep_errors", None) or []
    return [
        {
            "code": getattr(e, "code", None),
            "attribute": getattr(e, "attribute", None),
            "message": getattr(e, "message", None),
        }
        for e in deep_errors
    ]


def to_sale_result(result: Any) -> SaleResult:
    """
    Point unique de conversion SuccessfulResult/ErrorResult -> SaleResult.
    - is_success True: transaction sérialisée.
    - is_success False: message + erreurs de validation; la transaction
      (refus processeur) est conservée si présente.
    """
    transaction = _serialize_transaction(getattr(result, "transaction", None))
    if getattr(result, "is_success", False):
        return SaleResult(True, transaction=transaction)
    return SaleResult(
        False,
        transaction=transaction,
        message=getattr(result, "message", None) or "Transaction refusée",
        errors=_serialize_errors(result),
    )
