"""
Helpers partagés par les classes CRUD
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from supabase import Client
import logging

logger = logging.getLogger(__name__)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def update_entity_status(
    db: Client,
    table: str,
    entity_id: str,
    new_status: str,
    expected_status: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """
    Change le statut d'une ligne.

    Si expected_status est fourni, l'écriture n'a lieu que si la ligne a
    toujours ce statut (compare-and-set). Retourne la ligne mise à jour,
    ou None si aucune ligne ne correspond.
    """
    data = {"status": new_status, "updated_at": utcnow_iso()}
    if extra:
        data.update(extra)

    try:
        query = db.table(table).update(data).eq("id", entity_id)
        if expected_status is not None:
            query = query.eq("status", expected_status)
        result = query.execute()
    except Exception as e:
        logger.error(f"✗ Erreur changement de statut {table}/{entity_id}: {e}")
        raise

    if result.data:
        logger.info(f"✓ {table}/{entity_id}: {expected_status or '?'} → {new_status}")
        return result.data[0]
    return None
