# module storefront.orders.models
"""Forme d'une commande persistée.
- products: instantané du panier au moment du paiement
- buyer: identifiant de l'acheteur
- payment: résultat passerelle (flag succès + transaction)
- status: texte libre, "Not Processed" à la création
"""
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List

DEFAULT_ORDER_STATUS = "Not Processed"

def build_order(
    *,
    products: List[Dict[str, Any]],
    buyer: str,
    payment: Dict[str, Any],
    status: str = DEFAULT_ORDER_STATUS,
) -> Dict[str, Any]:
    return {
        "products": copy.deepcopy(list(products)),
        "buyer": buyer,
        "payment": payment,
        "status": status,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
