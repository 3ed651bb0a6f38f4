"""Fehler-Taxonomie der Matching-Engine.

Alle fachlichen Fehler erben von PeerMatchError. Zeit- und Tagesfehler
erben zusätzlich von ValueError, damit Pydantic-Validatoren sie als
Validierungsfehler melden.
"""


class PeerMatchError(Exception):
    """Basisklasse aller fachlichen Fehler."""


class InvalidTimeFormat(PeerMatchError, ValueError):
    """Uhrzeit ist kein gültiges "HH:MM"."""

    def __init__(self, value, reason: str = "") -> None:
        self.value = value
        msg = f"Ungültige Uhrzeit: {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class InvalidDayCode(PeerMatchError, ValueError):
    """Wochentag ist keiner der sieben Codes MON..SUN."""

    def __init__(self, value) -> None:
        self.value = value
        super().__init__(f"Unbekannter Wochentag: {value!r}")


class IncompleteProfile(PeerMatchError):
    """Profil ohne Batch/Sub-Batch: kein Matching möglich.

    Vom Aufrufer korrigierbar (Profil vervollständigen), kein Retry.
    """

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            f"Profil unvollständig (batch/subBatch fehlt): {user_id}"
        )


class ProfileNotFound(PeerMatchError):
    """Kein Profil zur angegebenen User-ID."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Profil nicht gefunden: {user_id}")


class GroupError(PeerMatchError):
    """Basisklasse für Fehler rund um Interessengruppen."""


class GroupAlreadyExists(GroupError):
    def __init__(self, interest_tag: str) -> None:
        self.interest_tag = interest_tag
        super().__init__(f"Es gibt bereits eine Gruppe für '{interest_tag}'.")


class GroupNotFound(GroupError):
    def __init__(self, group_id: str) -> None:
        self.group_id = group_id
        super().__init__(f"Gruppe nicht gefunden oder inaktiv: {group_id}")


class AlreadyMember(GroupError):
    def __init__(self, group_id: str, user_id: str) -> None:
        self.group_id = group_id
        self.user_id = user_id
        super().__init__(f"{user_id} ist bereits Mitglied von {group_id}.")
