"""JSON-Antwortformen der Endpunkte (camelCase, wie vom Frontend erwartet).

free-slots liefert start/startTime und end/endTime doppelt; das ist
Absicht und bleibt für Drahtkompatibilität erhalten.
"""

from typing import Sequence

from engine.availability import CurrentStatus, FreeNowResult
from engine.timeutil import format_time
from models.group import InterestGroup
from models.interval import FreeInterval
from models.match import Match


def match_response(match: Match) -> dict:
    return {
        "userId": match.user_id,
        "name": match.name,
        "batch": match.batch,
        "subBatch": match.sub_batch,
        "commonInterests": list(match.common_interests),
        "commonFreeSlot": {
            "start": match.common_free_slot.start,
            "end": match.common_free_slot.end,
            "duration": match.common_free_slot.duration,
        },
    }


def matches_response(matches: Sequence[Match]) -> list[dict]:
    return [match_response(m) for m in matches]


def free_slot_entry(slot: FreeInterval) -> dict:
    start = format_time(slot.start)
    end = format_time(slot.end)
    return {
        "start": start,
        "end": end,
        "startTime": start,
        "endTime": end,
        "duration": slot.duration,
    }


def free_slots_response(day: str, slots: Sequence[FreeInterval]) -> dict:
    return {"day": day, "freeSlots": [free_slot_entry(s) for s in slots]}


def free_now_response(result: FreeNowResult) -> dict:
    return {
        "count": result.count,
        "peers": [
            {"name": p.name, "batch": p.batch, "subBatch": p.sub_batch}
            for p in result.peers
        ],
    }


def status_response(status: CurrentStatus) -> dict:
    return {
        "status": status.kind.value,
        "label": status.label,
        "until": format_time(status.until) if status.until is not None else None,
    }


def group_response(group: InterestGroup) -> dict:
    return {
        "id": group.id,
        "interestTag": group.interest_tag,
        "creatorId": group.creator_id,
        "startTime": group.start_time.isoformat(),
        "expiryTime": group.expiry_time.isoformat(),
        "durationMinutes": group.duration_minutes,
        "members": list(group.members),
        "isActive": group.is_active,
    }
