from timetable.models import LectureSlot
from timetable.parser import parse_lecture_time, parse_tokens, period_to_minutes


def test_period_to_minutes():
    assert period_to_minutes(0) == (450, 540)
    assert period_to_minutes(1) == (540, 630)
    assert period_to_minutes(4) == (810, 900)


def test_parse_two_days():
    assert parse_lecture_time("월4 수3") == [
        LectureSlot(day=0, start_minutes=810, end_minutes=900),
        LectureSlot(day=2, start_minutes=720, end_minutes=810),
    ]


def test_parse_all_day_labels():
    slots = parse_lecture_time("월1 화1 수1 목1 금1 토1 일1")
    assert [s.day for s in slots] == [0, 1, 2, 3, 4, 5, 6]


def test_parse_empty_and_whitespace():
    assert parse_lecture_time("") == []
    assert parse_lecture_time("   \t\n ") == []
    assert parse_lecture_time(None) == []


def test_parse_skips_malformed_tokens():
    # Case: unknown label, missing period, trailing garbage, negative number
    slots = parse_lecture_time("X3 월 화2a 수-1 목2")
    assert slots == [LectureSlot(day=3, start_minutes=630, end_minutes=720)]


def test_parse_keeps_token_order_and_duplicates():
    slots = parse_lecture_time("금3 화7 금3")
    assert [(s.day, s.start_minutes) for s in slots] == [(4, 720), (1, 1080), (4, 720)]


def test_parse_extra_whitespace():
    assert len(parse_lecture_time("  화7   화8\t화9 ")) == 3


def test_parse_garbage_is_total():
    for raw in ["???", "월월", "12 34", "월1월2", "mon1", "🙂", "월０", "월" + "1" * 5000]:
        for slot in parse_lecture_time(raw):
            assert 0 <= slot.day <= 6
            assert slot.end_minutes == slot.start_minutes + 90


def test_parse_skips_non_ascii_digits():
    assert parse_lecture_time("월٣ 화１ 수０") == []
    assert parse_lecture_time("월٣ 목2") == [LectureSlot(day=3, start_minutes=630, end_minutes=720)]


def test_parse_skips_oversized_period():
    oversized = "월" + "1" * 5000
    assert parse_lecture_time(oversized + " 화1") == [LectureSlot(day=1, start_minutes=540, end_minutes=630)]
    assert parse_tokens(oversized)[0].ignored is True


def test_parse_large_period_within_limit():
    slots = parse_lecture_time("금" + "9" * 10)
    assert slots[0].start_minutes == 450 + 9999999999 * 90


def test_parse_tokens_reports_ignored():
    results = parse_tokens("월1 bad 화2")
    assert [r.token for r in results] == ["월1", "bad", "화2"]
    assert [r.ignored for r in results] == [False, True, False]
    assert results[1].slot is None
