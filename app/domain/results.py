# app/domain/results.py
"""
Résultat uniforme des opérations de mutation.

Les services ne lèvent pas d'exception vers l'appelant : ils retournent un
Result. La couche API traduit ErrorKind en statut HTTP et en message
localisé via les tables ci-dessous.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from app.domain.currency import DisplayLanguage, parse_language


class ErrorKind(str, Enum):
    validation = "validation"
    not_found = "not_found"
    forbidden = "forbidden"
    invalid_transition = "invalid_transition"
    conflict = "conflict"
    busy = "busy"
    store = "store"


class Result(BaseModel):
    ok: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None, warning: Optional[str] = None) -> "Result":
        return cls(ok=True, value=value, warning=warning)

    @classmethod
    def failure(cls, kind: ErrorKind, message: Optional[str] = None) -> "Result":
        return cls(ok=False, error=kind, message=message)


HTTP_STATUS = {
    ErrorKind.validation: 422,
    ErrorKind.not_found: 404,
    ErrorKind.forbidden: 403,
    ErrorKind.invalid_transition: 409,
    ErrorKind.conflict: 409,
    ErrorKind.busy: 429,
    ErrorKind.store: 502,
}

NOTICES = {
    DisplayLanguage.EN: {
        ErrorKind.validation: "Please check the information you entered.",
        ErrorKind.not_found: "The requested item could not be found.",
        ErrorKind.forbidden: "You are not allowed to perform this action.",
        ErrorKind.invalid_transition: "This action is not available in the current status.",
        ErrorKind.conflict: "This item was changed by someone else. Please refresh and try again.",
        ErrorKind.busy: "Your previous request is still being processed.",
        ErrorKind.store: "Something went wrong. Please try again.",
    },
    DisplayLanguage.FR: {
        ErrorKind.validation: "Veuillez vérifier les informations saisies.",
        ErrorKind.not_found: "L'élément demandé est introuvable.",
        ErrorKind.forbidden: "Vous n'êtes pas autorisé à effectuer cette action.",
        ErrorKind.invalid_transition: "Cette action n'est pas disponible pour le statut actuel.",
        ErrorKind.conflict: "Cet élément a été modifié entre-temps. Actualisez puis réessayez.",
        ErrorKind.busy: "Votre demande précédente est encore en cours.",
        ErrorKind.store: "Une erreur est survenue. Veuillez réessayer.",
    },
    DisplayLanguage.AR: {
        ErrorKind.validation: "يرجى التحقق من المعلومات المدخلة.",
        ErrorKind.not_found: "العنصر المطلوب غير موجود.",
        ErrorKind.forbidden: "غير مسموح لك بتنفيذ هذا الإجراء.",
        ErrorKind.invalid_transition: "هذا الإجراء غير متاح في الحالة الحالية.",
        ErrorKind.conflict: "تم تعديل هذا العنصر من قبل شخص آخر. يرجى التحديث والمحاولة مجددا.",
        ErrorKind.busy: "طلبك السابق لا يزال قيد المعالجة.",
        ErrorKind.store: "حدث خطأ ما. يرجى المحاولة مرة أخرى.",
    },
}

WARNING_NOTICES = {
    DisplayLanguage.EN: "Action completed, but the notification could not be sent.",
    DisplayLanguage.FR: "Action effectuée, mais la notification n'a pas pu être envoyée.",
    DisplayLanguage.AR: "تم تنفيذ الإجراء، لكن تعذر إرسال الإشعار.",
}

MAINTENANCE_NOTICES = {
    DisplayLanguage.EN: "The platform is under maintenance. Please come back later.",
    DisplayLanguage.FR: "La plateforme est en maintenance. Revenez plus tard.",
    DisplayLanguage.AR: "المنصة قيد الصيانة. يرجى العودة لاحقا.",
}


def _lang(lang) -> DisplayLanguage:
    return parse_language(lang) or DisplayLanguage.EN


def http_status_for(kind: ErrorKind) -> int:
    return HTTP_STATUS.get(kind, 500)


def notice_for(kind: ErrorKind, lang=DisplayLanguage.EN) -> str:
    """Texte de notification (toast) pour un type d'erreur."""
    return NOTICES[_lang(lang)][kind]


def warning_notice(lang=DisplayLanguage.EN) -> str:
    return WARNING_NOTICES[_lang(lang)]


def maintenance_notice(lang=DisplayLanguage.EN) -> str:
    return MAINTENANCE_NOTICES[_lang(lang)]
