# app/domain/maintenance.py
"""Décision d'accès quand la plateforme est en maintenance"""

from enum import Enum
from typing import Optional

LOGIN_PATH = "/login"


class SettingsState(str, Enum):
    loading = "loading"  # Jamais chargés
    ready = "ready"
    error = "error"      # Échec du chargement, aucun instantané disponible


class GateDecision(str, Enum):
    allow = "allow"
    block = "block"
    loading = "loading"


def should_block(maintenance_enabled: bool, role: Optional[str], path: str) -> bool:
    """Bloque sauf si la maintenance est coupée, l'utilisateur est admin ou la page est /login."""
    role_value = role.value if isinstance(role, Enum) else role
    return not (not maintenance_enabled or role_value == "admin" or path == LOGIN_PATH)


def evaluate_gate(
    state: SettingsState,
    maintenance_enabled: bool,
    role: Optional[str],
    path: str,
) -> GateDecision:
    """
    Décision complète du portail.

    Pendant le chargement on ne montre ni la page ni l'écran de maintenance.
    Si les paramètres n'ont jamais pu être lus, l'accès reste ouvert.
    """
    if state == SettingsState.loading:
        return GateDecision.loading
    if state == SettingsState.error:
        return GateDecision.allow
    if should_block(maintenance_enabled, role, path):
        return GateDecision.block
    return GateDecision.allow
