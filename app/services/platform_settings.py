"""
Service des paramètres de la plateforme.

Une instance par application (app.state.platform_settings), passée aux
consommateurs par injection de dépendance. Cycle de vie :
start() charge les paramètres, tente l'abonnement temps réel et lance un
rechargement périodique en tâche de fond ; chaque notification ou chaque
tour de boucle provoque un rechargement complet ; stop() arrête tout.

Le client synchrone de supabase-py ne gère pas le temps réel : le
rechargement périodique est alors la seule source de mise à jour. Il
permet aussi de sortir de l'état error dès que la base répond.
"""
from threading import Event, Lock, Thread
from typing import Any, Callable, Dict, List, Optional
import logging

from pydantic import ValidationError

from app.crud.settings import SettingsCRUD
from app.domain.maintenance import SettingsState
from app.domain.results import ErrorKind, Result
from app.models import CurrentUser, PlatformSettings, SettingKey
from app.models.settings import SETTING_MODELS, build_snapshot

logger = logging.getLogger(__name__)


class PlatformSettingsService:
    def __init__(self, crud: SettingsCRUD, poll_interval: float = 0):
        self.crud = crud
        self.poll_interval = poll_interval
        self.state = SettingsState.loading
        self._snapshot: Optional[PlatformSettings] = None
        self._lock = Lock()
        self._channel = None
        self._listeners: List[Callable[[PlatformSettings], None]] = []
        self._stop_event = Event()
        self._poller: Optional[Thread] = None

    @property
    def snapshot(self) -> PlatformSettings:
        """Dernier instantané connu (valeurs par défaut tant que rien n'est chargé)"""
        with self._lock:
            return self._snapshot or PlatformSettings()

    # ==================== Cycle de vie ====================

    def start(self) -> None:
        self.refresh()
        try:
            self._channel = self.crud.subscribe_to_changes(self._on_change)
        except NotImplementedError:
            logger.info("Temps réel non géré par le client, rechargement périodique uniquement")
        except Exception as e:
            logger.warning(f"⚠ Abonnement temps réel indisponible: {e}")

        if self.poll_interval > 0:
            self._stop_event.clear()
            self._poller = Thread(target=self._poll_loop, name="platform-settings-poll", daemon=True)
            self._poller.start()
            logger.info(f"✓ Rechargement des paramètres toutes les {self.poll_interval}s")

    def stop(self) -> None:
        self._stop_event.set()
        if self._poller is not None:
            self._poller.join(timeout=self.poll_interval + 1)
            self._poller = None
        if self._channel is not None:
            try:
                self.crud.unsubscribe(self._channel)
            finally:
                self._channel = None

    def _poll_loop(self) -> None:
        while not self._stop_event.wait(self.poll_interval):
            self.refresh()

    def _on_change(self, payload: Any = None) -> None:
        logger.info("Changement de paramètres reçu, rechargement")
        self.refresh()

    def refresh(self) -> bool:
        """
        Recharge tous les paramètres.

        En cas d'échec, l'instantané précédent est conservé ; s'il n'y en a
        pas, le service passe en état error.
        """
        try:
            rows = self.crud.get_all()
        except Exception as e:
            logger.error(f"✗ Erreur chargement des paramètres: {e}")
            with self._lock:
                if self._snapshot is None:
                    self.state = SettingsState.error
            return False

        snapshot = build_snapshot(rows)
        with self._lock:
            self._snapshot = snapshot
            self.state = SettingsState.ready
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"✗ Erreur dans un abonné aux paramètres: {e}")
        return True

    # ==================== Abonnés ====================

    def subscribe(self, listener: Callable[[PlatformSettings], None]) -> Callable[[], None]:
        """Ajoute un abonné ; retourne la fonction de désabonnement"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ==================== Écriture (admin) ====================

    def update(self, admin: CurrentUser, key: str, value: Dict[str, Any]) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")
        try:
            setting_key = SettingKey(key)
        except ValueError:
            return Result.failure(ErrorKind.not_found, f"Paramètre inconnu: {key}")

        model = SETTING_MODELS[setting_key]
        try:
            validated = model.model_validate(value)
        except ValidationError as e:
            return Result.failure(ErrorKind.validation, str(e))

        try:
            self.crud.upsert(setting_key, validated.model_dump(), updated_by=admin.id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

        # Les autres lecteurs le verront via la notification temps réel
        self.refresh()
        return Result.success(validated)
