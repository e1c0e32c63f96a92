from typing import Any, Dict
import logging
from storefront.config import ADMIN_EMAILS
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

def determine_role(email: str | None, metadata: Dict[str, Any] | None) -> str:
    if str((metadata or {}).get("role", "")).lower() == "admin":
        return "admin"
    if email and email in ADMIN_EMAILS:
        return "admin"
    return "user"

def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """
    Résout l'utilisateur via supabase.auth.get_user(access_token) et le normalise
    en {id, email, metadata, role}. L'émission des tokens est hors de ce service.
    """
    res = supabase_client.get_supabase().auth.get_user(access_token)
    user = getattr(res, "user", None) or {}
    if isinstance(user, dict):
        user_id, email, metadata = user.get("id"), user.get("email"), user.get("user_metadata")
    else:
        user_id = getattr(user, "id", None)
        email = getattr(user, "email", None)
        metadata = getattr(user, "user_metadata", None)
    return {
        "id": user_id,
        "email": email,
        "metadata": metadata or {},
        "role": determine_role(email, metadata),
    }
