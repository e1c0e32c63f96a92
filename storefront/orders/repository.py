"""
Accès aux données pour la feature 'orders' (table ORDERS_TABLE).
"""
from typing import Any, Dict, List
import logging
import storefront.infra.supabase_client as supabase_client
from storefront.config import ORDERS_TABLE

logger = logging.getLogger(__name__)

# module storefront.orders.repository
def insert_order(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insère une commande via service-role (bypass RLS).
    - Retourne la ligne créée (ou le record si l'API ne renvoie rien).
    - Les erreurs sont loguées puis propagées: le paiement est déjà encaissé.
    """
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(ORDERS_TABLE)
            .insert(record)
            .execute()
        )
    except Exception:
        logger.exception("orders.repository.insert_order failed buyer=%s", record.get("buyer"))
        raise
    rows = res.data or []
    return rows[0] if isinstance(rows, list) and rows else record

def fetch_buyer_orders(buyer_id: str) -> List[dict]:
    """
    Commandes d'un acheteur, plus récentes d'abord.
    - Retourne [] si buyer_id vide ou en cas d'erreur.
    """
    if not buyer_id:
        return []
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(ORDERS_TABLE)
            .select("*")
            .eq("buyer", buyer_id)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("orders.repository.fetch_buyer_orders failed buyer=%s", buyer_id)
        return []

def fetch_all_orders(limit: int = 100) -> List[dict]:
    """Toutes les commandes (admin), plus récentes d'abord."""
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(ORDERS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("orders.repository.fetch_all_orders failed limit=%s", limit)
        return []
