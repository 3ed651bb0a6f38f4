"""Kurzlebige Interessengruppen: anlegen, beitreten, auflisten, aufräumen."""

import logging
import uuid
from datetime import datetime, timedelta

from config.schema import GroupConfig
from data.store import GroupStore
from engine.errors import AlreadyMember, GroupAlreadyExists, GroupNotFound
from models.group import InterestGroup

logger = logging.getLogger(__name__)


class GroupRegistry:
    """Geschäftslogik der Interessengruppen über einem GroupStore."""

    def __init__(self, store: GroupStore, config: GroupConfig) -> None:
        self.store = store
        self.config = config

    def create(
        self,
        creator_id: str,
        interest_tag: str,
        duration_minutes: int,
        now: datetime,
    ) -> InterestGroup:
        """Legt eine Gruppe an; der Ersteller ist sofort Mitglied.

        Raises:
            GroupAlreadyExists: Für den Tag gibt es bereits eine aktive Gruppe.
            ValueError: Dauer außerhalb 1..max_duration_minutes.
        """
        tag = interest_tag.strip()
        if not tag:
            raise ValueError("Interessen-Tag darf nicht leer sein.")
        if not 1 <= duration_minutes <= self.config.max_duration_minutes:
            raise ValueError(
                f"Dauer {duration_minutes} min außerhalb 1–"
                f"{self.config.max_duration_minutes} min")
        if any(g.is_active and g.interest_tag == tag for g in self.store.all()):
            raise GroupAlreadyExists(tag)

        group = InterestGroup(
            id=uuid.uuid4().hex[:12],
            creator_id=creator_id,
            interest_tag=tag,
            start_time=now,
            expiry_time=now + timedelta(minutes=duration_minutes),
            duration_minutes=duration_minutes,
            members=[creator_id],
        )
        self.store.add(group)
        logger.info(f"Gruppe {group.id} '{tag}' angelegt von {creator_id} "
                    f"({duration_minutes} min)")
        return group

    def join(self, group_id: str, user_id: str) -> InterestGroup:
        """Tritt einer aktiven Gruppe bei.

        Raises:
            GroupNotFound: Gruppe fehlt oder ist inaktiv.
            AlreadyMember: user_id ist schon Mitglied.
        """
        group = self.store.get(group_id)
        if group is None or not group.is_active:
            raise GroupNotFound(group_id)
        if user_id in group.members:
            raise AlreadyMember(group_id, user_id)
        updated = group.model_copy(update={"members": group.members + [user_id]})
        self.store.replace(updated)
        logger.info(f"{user_id} ist Gruppe {group_id} beigetreten")
        return updated

    def active(self) -> list[InterestGroup]:
        """Aktive Gruppen, neueste zuerst."""
        groups = [g for g in self.store.all() if g.is_active]
        groups.sort(key=lambda g: g.start_time, reverse=True)
        return groups

    def sweep(self, now: datetime) -> tuple[int, int]:
        """Aufräum-Lauf.

        1. Löscht Gruppen mit genau einem Mitglied, die älter als
           solo_grace_minutes sind
        2. Markiert abgelaufene aktive Gruppen als inaktiv

        Returns:
            (gelöscht, deaktiviert)
        """
        cutoff = now - timedelta(minutes=self.config.solo_grace_minutes)
        stale = {
            g.id for g in self.store.all()
            if len(g.members) == 1 and g.start_time < cutoff
        }
        deleted = self.store.remove(stale)

        deactivated = 0
        for g in self.store.all():
            if g.is_active and g.is_expired(now):
                self.store.replace(g.model_copy(update={"is_active": False}))
                deactivated += 1

        if deleted or deactivated:
            logger.info(f"Gruppen-Aufräumlauf: {deleted} gelöscht, {deactivated} deaktiviert")
        return deleted, deactivated
