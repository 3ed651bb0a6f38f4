from models.interval import BusyInterval, BusyReason, FreeInterval, OperatingHours
from models.class_record import ClassRecord
from models.blocked_period import BlockedPeriod
from models.profile import StudentProfile
from models.match import Match, OverlapWindow
from models.group import InterestGroup
from models.campus_data import CampusData, ConsistencyReport

__all__ = [
    "BusyInterval",
    "BusyReason",
    "FreeInterval",
    "OperatingHours",
    "ClassRecord",
    "BlockedPeriod",
    "StudentProfile",
    "Match",
    "OverlapWindow",
    "InterestGroup",
    "CampusData",
    "ConsistencyReport",
]
