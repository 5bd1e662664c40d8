"""Application error hierarchy.

Every error the services or routers raise on purpose derives from
``AppError`` and carries the HTTP status it maps to plus the message shown to
the caller. Anything else reaching the exception handlers is reported as a
generic server error.
"""

from typing import Iterable


SERVER_ERROR_MESSAGE = "Erreur serveur"


class AppError(Exception):
    status_code: int = 500
    message: str = SERVER_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = 400
    message = "Données invalides"


class MissingFields(InvalidInputError):
    message = "Champs requis manquants"


class WrongCardCount(InvalidInputError):
    message = "Un deck doit contenir exactement 10 cartes"


class DuplicateCard(InvalidInputError):
    message = "Un deck ne peut pas contenir plusieurs fois la même carte"


class UnknownCard(InvalidInputError):
    message = "Certaines cartes n'existent pas"

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = sorted(set(missing_ids))
        super().__init__()


class UnauthenticatedError(AppError):
    status_code = 401
    message = "Utilisateur non authentifié"


class MissingToken(UnauthenticatedError):
    message = "Token manquant"


class InvalidOrExpiredToken(UnauthenticatedError):
    message = "Token invalide ou expiré"


class InvalidCredentials(UnauthenticatedError):
    message = "Email ou mot de passe incorrect"


class ForbiddenError(AppError):
    status_code = 403
    message = "Accès refusé à ce deck"


class NotFoundError(AppError):
    status_code = 404
    message = "Deck inexistant"


class ConflictError(AppError):
    status_code = 409
    message = "Ressource déjà existante"


class EmailTaken(ConflictError):
    message = "Un utilisateur avec cet email existe déjà"
