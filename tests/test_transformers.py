import json
from datetime import date, datetime

import pytest
from icalendar import Calendar

from timetable.models import CourseEntry, ViewState
from transformer import ICalTransformer, JsonTransformer


ENTRIES = [
    CourseEntry("C100", "01", title="물리", instructor="최교수", schedule="화2 화3"),
    CourseEntry("X", "01", title="X", schedule="월1"),
    CourseEntry("Y", "01", title="Y", schedule="월1"),
]


def test_ical_one_event_per_consolidated_interval():
    transformer = ICalTransformer(date(2026, 3, 2), date(2026, 6, 30))
    calendar = transformer.transform(ENTRIES)

    events = calendar.walk("VEVENT")
    assert len(events) == 3

    physics = [e for e in events if "물리" in str(e.get("summary"))][0]
    assert str(physics.get("summary")) == "[C100-01] 물리"
    assert physics.decoded("dtstart") == datetime(2026, 3, 3, 10, 30)
    assert physics.decoded("dtend") == datetime(2026, 3, 3, 13, 30)
    assert str(physics.get("description")) == "최교수"


def test_ical_custom_entry_summary():
    transformer = ICalTransformer(date(2026, 3, 2), date(2026, 6, 30))
    calendar = transformer.transform([CourseEntry.custom("동아리", "금5")])
    event = calendar.walk("VEVENT")[0]
    assert str(event.get("summary")) == "동아리"
    assert event.decoded("dtstart") == datetime(2026, 3, 6, 15, 0)


def test_ical_interval_ending_at_midnight():
    # Period 10 runs 22:30-24:00
    transformer = ICalTransformer(date(2026, 3, 2), date(2026, 6, 30))
    calendar = transformer.transform([CourseEntry("N1", "01", title="야간", schedule="월10")])
    event = calendar.walk("VEVENT")[0]

    assert event.decoded("dtstart") == datetime(2026, 3, 2, 22, 30)
    assert event.decoded("dtend") == datetime(2026, 3, 3, 0, 0)


def test_ical_save(tmp_path):
    transformer = ICalTransformer(date(2026, 3, 2), date(2026, 6, 30))
    with pytest.raises(RuntimeError):
        transformer.save(str(tmp_path / "out.ics"))

    transformer.transform(ENTRIES)
    path = tmp_path / "out.ics"
    transformer.save(str(path))

    parsed = Calendar.from_ical(path.read_bytes())
    assert len(parsed.walk("VEVENT")) == 3


def test_json_layout_document():
    document = JsonTransformer().transform(ENTRIES)

    assert document["windowStart"] == "09:00"
    assert document["windowEnd"] == "18:00"
    assert document["days"] == [0, 1, 2, 3, 4]

    conflict, physics = document["blocks"]
    assert conflict["isConflict"] is True
    assert conflict["title"] == "X / Y"
    assert [e["courseCode"] for e in conflict["entries"]] == ["X", "Y"]
    assert physics["start"] == "10:30"
    assert physics["end"] == "13:30"
    assert physics["isConflict"] is False

    assert document["timeLabels"][0] == {"time": "09:00", "topPercent": 0}
    assert document["periodLabels"][0]["label"] == "1교시"


def test_json_respects_view_state(tmp_path):
    transformer = JsonTransformer(ViewState(custom_start="10:00", custom_end="12:00",
                                            included_days=frozenset({1})))
    with pytest.raises(RuntimeError):
        transformer.save(str(tmp_path / "layout.json"))

    transformer.transform(ENTRIES)
    path = tmp_path / "layout.json"
    transformer.save(str(path))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["days"] == [1]
    assert len(document["blocks"]) == 1
    assert document["blocks"][0]["heightPercent"] == pytest.approx(75.0)
