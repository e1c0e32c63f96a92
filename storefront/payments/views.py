import logging
from typing import Any, Dict

from fastapi import APIRouter, Request, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from storefront.utils.security import require_user
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/product/braintree", tags=["Payments API"])

# module storefront.payments.views
@router.api_route("/token", methods=["GET", "POST"])
def braintree_token():
    """
    Token client Braintree pour le widget Drop-in.
    - Réponse: {"success": true, "clientToken": "..."}
    - Erreurs: 500 {"success": false, "error", "message": "Error in generating token"}
    """
    return JSONResponse(payments_service.generate_client_token())

@router.post("/payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def braintree_payment(request: Request, user: Dict[str, Any] = Depends(require_user)):
    """
    Paiement du panier de l'utilisateur authentifié.
    - Entrée JSON: { "nonce": "<nonce Drop-in>", "cart": [ {_id, name, price, quantity}, ... ] }
    - Étapes (payments_service.submit_payment):
      1) Valider identité, nonce, panier présent, non vide et lignes débitables (400)
      2) Calculer le montant et soumettre la vente Braintree (502 refus / 500 indisponible)
      3) Enregistrer la commande (500 si échec)
    - Réponse: {"ok": true}
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    # SDK Braintree et Supabase sont synchrones
    result = await run_in_threadpool(
        payments_service.submit_payment,
        user_id=user.get("id"),
        nonce=body.get("nonce"),
        cart=body.get("cart"),
    )
    return JSONResponse(result)
