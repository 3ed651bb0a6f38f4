"""Tests für Zeitarithmetik, Freizeit-Berechnung, Verfügbarkeit und Matching."""

import logging
from datetime import datetime

import pytest

from config.schema import MatchingConfig, OverlapPolicy
from data.store import ProfileStore, TimetableStore
from engine.availability import StatusKind, current_status, find_free_now
from engine.errors import IncompleteProfile, InvalidDayCode, InvalidTimeFormat, ProfileNotFound
from engine.free_slots import (
    build_day_agenda,
    busy_intervals_for,
    calculate_free_slots,
    group_busy_by_section,
)
from engine.matcher import (
    PeerMatcher,
    build_interest_index,
    common_interests,
    find_best_overlap,
    prefilter_candidates,
)
from engine.timeutil import (
    day_code,
    format_span,
    format_time,
    minutes_of_day,
    normalize_day,
    parse_time,
)
from models.blocked_period import BlockedPeriod
from models.campus_data import CampusData
from models.class_record import ClassRecord
from models.interval import BusyInterval, BusyReason, FreeInterval, OperatingHours
from models.profile import StudentProfile


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

HOURS = OperatingHours(start=540, end=1020)   # 09:00–17:00


def _busy(*spans: tuple[str, str]) -> list[BusyInterval]:
    return [BusyInterval(parse_time(s), parse_time(e)) for s, e in spans]


def _free(*spans: tuple[str, str]) -> list[FreeInterval]:
    return [FreeInterval(parse_time(s), parse_time(e)) for s, e in spans]


def _cls(sub_batch: str, start: str, end: str, subject: str = "DSA",
         day: str = "MON", cancelled: bool = False) -> ClassRecord:
    return ClassRecord(
        batch=sub_batch[0], sub_batch=sub_batch, day=day,
        start_time=start, end_time=end, subject=subject, is_cancelled=cancelled,
    )


def _profile(user_id: str, sub_batch: str | None, interests: list[str]) -> StudentProfile:
    return StudentProfile(
        user_id=user_id,
        name=user_id.upper(),
        batch=sub_batch[0] if sub_batch else None,
        sub_batch=sub_batch,
        interests=interests,
    )


def _stores(classes, profiles) -> tuple[TimetableStore, ProfileStore]:
    data = CampusData(classes=classes, profiles=profiles)
    return TimetableStore(data), ProfileStore(data)


def _xy_data():
    """X (A1) belegt 09–10 und 11–12, Y (A2) belegt 09:30–10:30."""
    classes = [
        _cls("A1", "09:00", "10:00"),
        _cls("A1", "11:00", "12:00", "OS"),
        _cls("A2", "09:30", "10:30", "DBMS"),
    ]
    profiles = [
        _profile("x", "A1", ["DSA", "Chess"]),
        _profile("z", "A1", ["Chess"]),           # gleicher Sub-Batch
        _profile("y", "A2", ["Chess", "Music"]),
        _profile("w", "B1", ["Chess"]),           # anderer Batch
        _profile("v", "A3", ["Music"]),           # keine gemeinsamen Interessen
    ]
    return _stores(classes, profiles)


# ─── Zeitarithmetik ───────────────────────────────────────────────────────────

class TestTimeUtil:
    def test_parse_time_basic(self):
        assert parse_time("00:00") == 0
        assert parse_time("09:00") == 540
        assert parse_time("23:59") == 1439

    def test_parse_time_tolerates_whitespace_and_short_fields(self):
        assert parse_time(" 9:5 ") == 545

    @pytest.mark.parametrize("raw", [
        "24:00", "12:60", "abc", "12", "12:30:00", "-1:00", "",
        "０９:００",      # Vollbreite Ziffern
        "٠٩:٣٠",      # Arabisch-indische Ziffern
    ])
    def test_parse_time_strict(self, raw):
        """Ungültige Uhrzeiten werden abgelehnt, nicht still als 0 gewertet."""
        with pytest.raises(InvalidTimeFormat):
            parse_time(raw)

    def test_parse_time_rejects_non_string(self):
        with pytest.raises(InvalidTimeFormat):
            parse_time(930)

    def test_invalid_time_is_value_error(self):
        with pytest.raises(ValueError):
            parse_time("99:99")

    def test_format_time(self):
        assert format_time(0) == "00:00"
        assert format_time(630) == "10:30"
        assert format_time(1439) == "23:59"

    @pytest.mark.parametrize("value", [-1, 1440, True, 10.5])
    def test_format_time_out_of_range(self, value):
        with pytest.raises(InvalidTimeFormat):
            format_time(value)

    def test_round_trip(self):
        for m in range(0, 1440, 7):
            assert parse_time(format_time(m)) == m

    def test_format_span(self):
        assert format_span(630, 660) == "10:30–11:00"

    def test_datetime_helpers(self):
        dt = datetime(2024, 1, 1, 10, 30, 59)   # Montag
        assert minutes_of_day(dt) == 630
        assert day_code(dt) == "MON"
        assert day_code(datetime(2024, 1, 7)) == "SUN"

    def test_normalize_day(self):
        assert normalize_day("mon") == "MON"
        assert normalize_day("Wednesday") == "WED"
        assert normalize_day(" Tu ") == "TUE"
        with pytest.raises(InvalidDayCode):
            normalize_day("Funday")


# ─── Freizeit-Berechnung ──────────────────────────────────────────────────────

class TestFreeSlots:
    def test_empty_busy_yields_full_window(self):
        assert calculate_free_slots([], HOURS) == [FreeInterval(540, 1020)]

    def test_fully_covered_day(self):
        busy = _busy(("09:00", "13:00"), ("13:00", "17:00"))
        assert calculate_free_slots(busy, HOURS) == []

    def test_gaps_between_classes(self):
        busy = _busy(("10:00", "11:00"), ("12:00", "13:00"))
        assert calculate_free_slots(busy, HOURS) == _free(
            ("09:00", "10:00"), ("11:00", "12:00"), ("13:00", "17:00"))

    def test_unsorted_input(self):
        busy = _busy(("12:00", "13:00"), ("10:00", "11:00"))
        assert calculate_free_slots(busy, HOURS) == _free(
            ("09:00", "10:00"), ("11:00", "12:00"), ("13:00", "17:00"))

    def test_contained_interval_collapses(self):
        """{[10:00,11:00),[10:30,10:45)} verhält sich wie {[10:00,11:00)}."""
        alone = calculate_free_slots(_busy(("10:00", "11:00")), HOURS)
        nested = calculate_free_slots(_busy(("10:00", "11:00"), ("10:30", "10:45")), HOURS)
        assert nested == alone

    def test_overlapping_intervals_absorbed(self):
        busy = _busy(("10:00", "11:00"), ("10:30", "11:30"))
        assert calculate_free_slots(busy, HOURS) == _free(("09:00", "10:00"), ("11:30", "17:00"))

    def test_no_zero_length_intervals(self):
        busy = _busy(("09:00", "10:00"), ("10:00", "11:00"), ("16:00", "17:00"))
        free = calculate_free_slots(busy, HOURS)
        assert free == _free(("11:00", "16:00"))
        assert all(f.duration > 0 for f in free)

    @pytest.mark.parametrize("spans", [
        [("09:15", "09:45"), ("11:00", "12:30"), ("14:00", "15:00")],
        [("12:00", "13:00")],
        [("09:00", "10:00"), ("16:00", "17:00")],
        [("10:00", "11:00"), ("11:00", "12:00"), ("12:00", "12:30")],
        [("09:00", "09:30"), ("09:30", "10:00"), ("15:00", "17:00")],
        [("16:59", "17:00")],
        [("09:00", "17:00")],
    ])
    def test_tiles_operating_window(self, spans):
        """Freie und belegte Intervalle zusammen �berdecken das Tagesfenster l�ckenlos."""
        busy = _busy(*spans)
        free = calculate_free_slots(busy, HOURS)
        pieces = sorted([(b.start, b.end) for b in busy] + [(f.start, f.end) for f in free])
        assert pieces[0][0] == HOURS.start
        assert pieces[-1][1] == HOURS.end
        for (_, end), (start, _) in zip(pieces, pieces[1:]):
            assert end == start

    def test_busy_outside_hours_is_clipped(self):
        busy = _busy(("08:00", "09:30"), ("16:30", "18:00"), ("18:00", "19:00"))
        assert calculate_free_slots(busy, HOURS) == _free(("09:30", "16:30"))

    def test_busy_intervals_skip_cancelled(self):
        records = [_cls("A1", "10:00", "11:00"), _cls("A1", "12:00", "13:00", cancelled=True)]
        busy = busy_intervals_for(records, HOURS)
        assert [(b.start, b.end) for b in busy] == [(600, 660)]
        assert busy[0].reason == BusyReason.CLASS
        assert busy[0].label == "DSA"

    def test_holiday_blocks_whole_day(self):
        busy = busy_intervals_for([], HOURS, is_holiday=True)
        assert busy[0].reason == BusyReason.HOLIDAY
        assert calculate_free_slots(busy, HOURS) == []

    def test_blocked_period_feeds_same_sweep(self):
        blocked = [BlockedPeriod(day="MON", start_time="14:00", end_time="15:00", label="Prüfung")]
        busy = busy_intervals_for([_cls("A1", "09:00", "10:00")], HOURS, blocked=blocked)
        assert {b.reason for b in busy} == {BusyReason.CLASS, BusyReason.BLOCKED}
        assert calculate_free_slots(busy, HOURS) == _free(("10:00", "14:00"), ("15:00", "17:00"))

    def test_group_busy_by_section(self):
        records = [_cls("A1", "09:00", "10:00"), _cls("A2", "10:00", "11:00"),
                   _cls("A2", "11:00", "12:00", cancelled=True)]
        blocked = [BlockedPeriod(day="MON", start_time="13:00", end_time="14:00")]
        by_section, campus_wide = group_busy_by_section(records, blocked)
        assert set(by_section) == {"A-A1", "A-A2"}
        assert len(by_section["A-A2"]) == 1
        assert len(campus_wide) == 1

    def test_day_agenda_order(self):
        records = [
            _cls("A1", "11:00", "12:00", "OS"),
            _cls("A1", "09:00", "10:00", "DSA"),
            _cls("A1", "14:00", "15:00", "CN", cancelled=True),
        ]
        agenda = build_day_agenda(records, HOURS)
        assert [i.kind for i in agenda] == ["class", "free", "class", "free"]
        assert agenda[0].subject == "DSA"
        assert (agenda[-1].start, agenda[-1].end) == (720, 1020)
        assert agenda[1].duration == 60


# ─── Verfügbarkeit ────────────────────────────────────────────────────────────

class TestAvailability:
    def _roster(self):
        return [
            _profile("a", "A1", []),
            _profile("b", "A2", []),
            _profile("c", None, []),
            _profile("me", "A2", []),
        ]

    def test_busy_section_not_free(self):
        busy = {"A-A1": _busy(("09:00", "10:00"))}
        result = find_free_now(busy, self._roster(), 570, HOURS, exclude_user_id="me")
        assert result.count == 2
        assert {p.user_id for p in result.peers} == {"b", "c"}

    def test_interval_end_is_exclusive(self):
        busy = {"A-A1": _busy(("09:00", "10:00"))}
        result = find_free_now(busy, self._roster(), 600, HOURS, exclude_user_id="me")
        assert result.count == 3

    def test_self_excluded(self):
        result = find_free_now({}, self._roster(), 600, HOURS, exclude_user_id="me")
        assert "me" not in {p.user_id for p in result.peers}
        assert result.count == 3

    @pytest.mark.parametrize("minute", [0, 539, 1020, 1300])
    def test_outside_hours_count_zero(self, minute):
        result = find_free_now({}, self._roster(), minute, HOURS)
        assert result.count == 0
        assert result.peers == []

    def test_preview_capped(self):
        roster = [_profile(f"s{i}", "A1", []) for i in range(8)]
        result = find_free_now({}, roster, 600, HOURS, preview_limit=5)
        assert result.count == 8
        assert len(result.peers) == 5

    def test_campus_wide_block(self):
        campus = [BusyInterval(720, 780, BusyReason.BLOCKED)]
        result = find_free_now({}, self._roster(), 750, HOURS, campus_wide=campus)
        assert result.count == 0


class TestCurrentStatus:
    BUSY = [
        BusyInterval(540, 600, label="DSA"),
        BusyInterval(600, 660, label="OS"),
        BusyInterval(720, 780, label="CN"),
    ]

    def test_in_class_extends_adjacent_blocks(self):
        status = current_status(self.BUSY, 550, HOURS)
        assert status.kind == StatusKind.IN_CLASS
        assert status.label == "DSA"
        assert status.until == 660

    def test_free_until_next_class(self):
        status = current_status(self.BUSY, 670, HOURS)
        assert status.kind == StatusKind.FREE
        assert status.until == 720

    def test_free_until_end_of_day(self):
        assert current_status(self.BUSY, 800, HOURS).until == 1020

    def test_outside_hours(self):
        status = current_status(self.BUSY, 500, HOURS)
        assert status.kind == StatusKind.OUTSIDE_HOURS
        assert status.until is None


# ─── Matching ─────────────────────────────────────────────────────────────────

class TestOverlap:
    def test_common_interests_keep_own_order(self):
        assert common_interests(["b", "a", "c"], ["c", "a"]) == ["a", "c"]
        assert common_interests(["a"], ["b"]) == []

    def test_first_overlap_wins(self):
        """Erstes passendes Fenster gewinnt, auch wenn später ein längeres käme."""
        mine = _free(("10:00", "11:00"), ("12:00", "17:00"))
        theirs = _free(("09:00", "09:30"), ("10:30", "17:00"))
        overlap = find_best_overlap(mine, theirs, 30)
        assert overlap == FreeInterval(630, 660)
        assert overlap.duration == 30

    def test_longest_policy(self):
        mine = _free(("10:00", "11:00"), ("12:00", "17:00"))
        theirs = _free(("09:00", "09:30"), ("10:30", "17:00"))
        overlap = find_best_overlap(mine, theirs, 30, OverlapPolicy.LONGEST)
        assert overlap == FreeInterval(720, 1020)

    def test_insufficient_overlap(self):
        mine = _free(("09:00", "10:00"))
        theirs = _free(("09:40", "11:00"))
        assert find_best_overlap(mine, theirs, 30) is None
        assert find_best_overlap(mine, theirs, 20) == FreeInterval(580, 600)


class TestPeerMatcher:
    def test_worked_example(self):
        timetable, profiles = _xy_data()
        matches = PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("x")
        assert len(matches) == 1
        m = matches[0]
        assert m.user_id == "y"
        assert (m.batch, m.sub_batch) == ("A", "A2")
        assert m.common_interests == ["Chess"]
        assert m.common_free_slot.start == "10:30"
        assert m.common_free_slot.end == "11:00"
        assert m.common_free_slot.duration == 30

    def test_longest_policy_in_matcher(self):
        timetable, profiles = _xy_data()
        cfg = MatchingConfig(overlap_policy=OverlapPolicy.LONGEST)
        m = PeerMatcher(timetable, profiles, cfg).find_matches_for("x")[0]
        assert (m.common_free_slot.start, m.common_free_slot.end) == ("12:00", "17:00")
        assert m.common_free_slot.duration == 300

    def test_same_sub_batch_and_other_batch_excluded(self):
        timetable, profiles = _xy_data()
        ids = {m.user_id for m in PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("x")}
        assert "z" not in ids
        assert "w" not in ids
        assert "x" not in ids

    def test_disjoint_interests_never_match(self):
        timetable, profiles = _xy_data()
        # v (A3) hat keinen Stundenplan, also ganztägig frei, teilt aber keine Interessen
        ids = {m.user_id for m in PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("x")}
        assert "v" not in ids

    def test_no_match_without_long_enough_overlap(self):
        classes = [
            _cls("A1", "10:00", "17:00"),                 # frei 09:00–10:00
            _cls("A2", "09:00", "09:45"),
            _cls("A2", "10:15", "17:00"),                 # frei 09:45–10:15
        ]
        timetable, profiles = _stores(classes, [
            _profile("p", "A1", ["Chess"]),
            _profile("q", "A2", ["Chess"]),
        ])
        assert PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("p") == []

    def test_reference_day_respected(self):
        timetable, profiles = _xy_data()
        cfg = MatchingConfig(reference_day="TUE")
        # Dienstag ohne Veranstaltungen → ganzer Tag gemeinsam frei
        m = PeerMatcher(timetable, profiles, cfg).find_matches_for("x")
        assert {x.user_id for x in m} == {"y"}
        assert m[0].common_free_slot.duration == 480

    def test_incomplete_profile(self):
        timetable, profiles = _stores([], [_profile("n", None, ["Chess"])])
        with pytest.raises(IncompleteProfile):
            PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("n")

    def test_unknown_profile(self):
        timetable, profiles = _xy_data()
        with pytest.raises(ProfileNotFound):
            PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("nobody")

    def test_interest_index_same_result(self):
        timetable, profiles = _xy_data()
        plain = PeerMatcher(timetable, profiles, MatchingConfig()).find_matches_for("x")
        indexed = PeerMatcher(
            timetable, profiles, MatchingConfig(),
            interest_index=profiles.interest_index(),
        ).find_matches_for("x")
        assert indexed == plain

    def test_prefilter_candidates(self):
        people = [_profile("y", "A2", ["Chess"]), _profile("v", "A3", ["Music"])]
        index = build_interest_index(people + [_profile("n", None, ["Chess"])])
        assert ("A", "Chess") in index
        assert all(key[0] is not None for key in index)
        kept = prefilter_candidates(people, index, "A", ["Chess"])
        assert [p.user_id for p in kept] == ["y"]

    def test_candidate_bound_logs_warning(self, caplog):
        classes = [_cls("A1", "09:00", "10:00")]
        people = [_profile("me", "A1", ["Chess"])] + [
            _profile(f"c{i}", "A2", ["Chess"]) for i in range(3)
        ]
        timetable, profiles = _stores(classes, people)
        cfg = MatchingConfig(max_candidates=2)
        with caplog.at_level(logging.WARNING, logger="engine.matcher"):
            matches = PeerMatcher(timetable, profiles, cfg).find_matches_for("me")
        assert [m.user_id for m in matches] == ["c0", "c1"]
        assert "scanne nur die ersten 2" in caplog.text
