# app/models/settings.py
"""
Paramètres de la plateforme (table platform_settings).

Chaque clé a son propre schéma avec des valeurs par défaut explicites.
parse_setting() valide le JSON brut à la frontière : un contenu invalide
est remplacé par les valeurs par défaut de la clé, avec un avertissement.
"""

from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Any, Dict, Optional, Type
from enum import Enum
import logging

from app.domain.currency import DEFAULT_EXCHANGE_RATES, DisplayCurrency

logger = logging.getLogger(__name__)


class SettingKey(str, Enum):
    general_settings = "general_settings"
    commission_rates = "commission_rates"
    notification_settings = "notification_settings"
    security_settings = "security_settings"
    email_settings = "email_settings"
    commenting_enabled = "commenting_enabled"
    currency_exchange_rates = "currency_exchange_rates"


class GeneralSettings(BaseModel):
    platform_name: str = "Holibayt"
    support_email: str = "contact@holibayt.com"
    maintenance_mode: bool = False

    @field_validator("maintenance_mode", mode="before")
    @classmethod
    def strict_bool(cls, v):
        # Seul un vrai booléen active la maintenance ("true", 1... sont refusés)
        if not isinstance(v, bool):
            raise ValueError("maintenance_mode doit être un booléen")
        return v


class CommissionRates(BaseModel):
    default: float = Field(15, ge=0, le=100)
    short_stay: float = Field(12, ge=0, le=100)
    rental: float = Field(10, ge=0, le=100)
    sale: float = Field(5, ge=0, le=100)
    minimum_amount: float = Field(1000, ge=0)


class NotificationSettings(BaseModel):
    email_notifications: bool = True
    push_notifications: bool = True
    sms_notifications: bool = False


class SecuritySettings(BaseModel):
    require_email_verification: bool = True
    require_host_kyc: bool = True
    session_timeout_minutes: int = Field(60, ge=5)


class EmailSettings(BaseModel):
    sender_name: str = "Holibayt"
    sender_email: str = "no-reply@holibayt.com"
    booking_confirmation: bool = True
    withdrawal_updates: bool = True


class CommentingSettings(BaseModel):
    blogs: bool = True
    properties: bool = True


class ExchangeRates(BaseModel):
    DZD: float = Field(1.0, gt=0)
    USD: float = Field(DEFAULT_EXCHANGE_RATES[DisplayCurrency.USD], gt=0)
    EUR: float = Field(DEFAULT_EXCHANGE_RATES[DisplayCurrency.EUR], gt=0)

    def as_table(self) -> Dict[DisplayCurrency, float]:
        # Le dinar reste la base
        return {
            DisplayCurrency.DZD: 1.0,
            DisplayCurrency.USD: self.USD,
            DisplayCurrency.EUR: self.EUR,
        }


SETTING_MODELS: Dict[SettingKey, Type[BaseModel]] = {
    SettingKey.general_settings: GeneralSettings,
    SettingKey.commission_rates: CommissionRates,
    SettingKey.notification_settings: NotificationSettings,
    SettingKey.security_settings: SecuritySettings,
    SettingKey.email_settings: EmailSettings,
    SettingKey.commenting_enabled: CommentingSettings,
    SettingKey.currency_exchange_rates: ExchangeRates,
}


class PlatformSettings(BaseModel):
    """Instantané complet des paramètres"""
    general_settings: GeneralSettings = Field(default_factory=GeneralSettings)
    commission_rates: CommissionRates = Field(default_factory=CommissionRates)
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)
    security_settings: SecuritySettings = Field(default_factory=SecuritySettings)
    email_settings: EmailSettings = Field(default_factory=EmailSettings)
    commenting_enabled: CommentingSettings = Field(default_factory=CommentingSettings)
    currency_exchange_rates: ExchangeRates = Field(default_factory=ExchangeRates)

    @property
    def maintenance_mode(self) -> bool:
        return self.general_settings.maintenance_mode

    def public_view(self) -> Dict[str, Any]:
        """Sous-ensemble lisible par tous les visiteurs"""
        return {
            "platform_name": self.general_settings.platform_name,
            "support_email": self.general_settings.support_email,
            "maintenance_mode": self.general_settings.maintenance_mode,
            "commenting_enabled": self.commenting_enabled.model_dump(),
            "currency_exchange_rates": self.currency_exchange_rates.model_dump(),
        }


def parse_setting_key(key: str) -> Optional[SettingKey]:
    try:
        return SettingKey(key)
    except ValueError:
        return None


def parse_setting(key: SettingKey, raw: Any) -> BaseModel:
    """
    Valide la valeur JSON d'une clé.

    Les champs invalides ou absents prennent leur valeur par défaut ;
    une valeur qui n'est pas un objet donne les défauts de la clé.
    """
    model = SETTING_MODELS[key]
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning(f"⚠ Paramètre {key.value} ignoré: objet attendu, reçu {type(raw).__name__}")
        return model()

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err.get("loc")}
        logger.warning(f"⚠ Paramètre {key.value}: champs invalides {sorted(map(str, bad_fields))}, valeurs par défaut appliquées")
        cleaned = {k: v for k, v in raw.items() if k not in bad_fields}
        try:
            return model.model_validate(cleaned)
        except ValidationError:
            return model()


def build_snapshot(rows: list) -> PlatformSettings:
    """Construit l'instantané à partir des lignes (setting_key, setting_value)."""
    values = {}
    for row in rows:
        key = parse_setting_key(row.get("setting_key", ""))
        if key is None:
            continue
        values[key.value] = parse_setting(key, row.get("setting_value"))
    return PlatformSettings(**values)
