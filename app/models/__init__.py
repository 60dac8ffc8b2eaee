"""
Modèles Pydantic pour l'API Holibayt

Modules:
- Property : Annonces et modération
- Booking : Réservations
- Withdrawal : Comptes de paiement, retraits, solde hôte
- Conversation : Messagerie
- Settings : Paramètres de la plateforme
"""

# ====================================
# PROPERTY MODELS
# ====================================
from .property import (
    PropertyStatus,
    PropertyCategory,
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyReject,
    Property,
    PropertyView
)

# ====================================
# BOOKING MODELS
# ====================================
from .booking import (
    BookingStatus,
    BookingBucket,
    BookingCreate,
    Booking,
    BookingView
)

# ====================================
# WITHDRAWAL MODELS
# ====================================
from .withdrawal import (
    WithdrawalStatus,
    PaymentAccountCreate,
    PaymentAccount,
    WithdrawalCreate,
    WithdrawalReject,
    WithdrawalRequest,
    HostBalance
)

# ====================================
# CONVERSATION MODELS
# ====================================
from .conversation import (
    ConversationStatus,
    ConversationType,
    ConversationStatusUpdate,
    MessageAdd,
    Message,
    Conversation
)

# ====================================
# USER / NOTIFICATION / SETTINGS
# ====================================
from .common import ActionResponse
from .user import UserRole, CurrentUser
from .notification import NotificationType, NotificationCreate
from .settings import (
    SettingKey,
    PlatformSettings,
    GeneralSettings,
    CommissionRates,
    ExchangeRates,
    parse_setting,
    parse_setting_key,
    build_snapshot
)

__all__ = [
    # Property
    "PropertyStatus",
    "PropertyCategory",
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyReject",
    "Property",
    "PropertyView",

    # Booking
    "BookingStatus",
    "BookingBucket",
    "BookingCreate",
    "Booking",
    "BookingView",

    # Withdrawal
    "WithdrawalStatus",
    "PaymentAccountCreate",
    "PaymentAccount",
    "WithdrawalCreate",
    "WithdrawalReject",
    "WithdrawalRequest",
    "HostBalance",

    # Conversation
    "ConversationStatus",
    "ConversationType",
    "ConversationStatusUpdate",
    "MessageAdd",
    "Message",
    "Conversation",

    # Common / User / Notification / Settings
    "ActionResponse",
    "UserRole",
    "CurrentUser",
    "NotificationType",
    "NotificationCreate",
    "SettingKey",
    "PlatformSettings",
    "GeneralSettings",
    "CommissionRates",
    "ExchangeRates",
    "parse_setting",
    "parse_setting_key",
    "build_snapshot",
]
