import json

import pytest

from catalog import CatalogScraper, load_catalog, select_entries
from timetable.models import CourseEntry, total_credits


CATALOG_HTML = """
<html><body>
<table class="notice"><tr><td>2026학년도 1학기</td></tr></table>
<table class="catalog">
  <tr><th>학정번호</th><th>과목명</th><th>분반</th><th>담당교수</th><th>학점</th><th>강의시간</th><th>비고</th></tr>
  <tr><td>H030-4-0846-01</td><td>자료구조</td><td>01</td><td>김교수</td><td>3</td><td>월4 수3</td><td></td></tr>
  <tr><td>H030-4-0846-02</td><td>자료구조</td><td>02</td><td>이교수</td><td>3</td><td>화2 화3</td><td>영어강의</td></tr>
  <tr><td></td><td>빈 행</td><td></td><td></td><td></td><td></td><td></td></tr>
</table>
</body></html>
"""

RECORDS = [
    {"구분": "전공", "학정번호": "0000-1-3092-01", "과목명": "운영체제", "분반": "01",
     "이수": "전필", "학점": "3", "시수": "3", "담당교수": "박교수", "강의시간": "목2 목3",
     "강의유형": "이론"},
    {"학정번호": "0000-1-3092-01", "과목명": "운영체제", "분반": "02", "학점": "3",
     "강의시간": "금1"},
    {"학정번호": "0000-2-4512-02", "과목명": "세미나", "분반": "01", "학점": "P/F"},
]


def test_from_record_maps_labels():
    entry = CourseEntry.from_record(RECORDS[0])
    assert entry.course_code == "0000-1-3092-01"
    assert entry.section == "01"
    assert entry.title == "운영체제"
    assert entry.completion == "전필"
    assert entry.schedule == "목2 목3"
    assert entry.key == ("0000-1-3092-01", "01")


def test_from_record_missing_fields():
    entry = CourseEntry.from_record({"학정번호": "X1", "강의시간": None})
    assert entry.schedule == ""
    assert entry.instructor == ""


def test_custom_entry():
    entry = CourseEntry.custom("  동아리  ", "금5 금6", "0")
    assert entry.is_custom is True
    assert entry.title == "동아리"
    assert entry.section == ""
    assert CourseEntry.custom("동아리").course_code != entry.course_code


def test_total_credits_ignores_non_numeric():
    entries = [CourseEntry.from_record(r) for r in RECORDS]
    assert total_credits(entries) == 6
    assert total_credits([]) == 0


def test_scraper_parses_html_table():
    scraper = CatalogScraper()
    scraper.load_html(CATALOG_HTML)
    entries = scraper.parse_entries()

    assert [e.key for e in entries] == [("H030-4-0846-01", "01"), ("H030-4-0846-02", "02")]
    assert entries[0].instructor == "김교수"
    assert entries[1].schedule == "화2 화3"


def test_scraper_requires_loaded_page():
    with pytest.raises(RuntimeError):
        CatalogScraper().parse_entries()


def test_scraper_missing_table():
    scraper = CatalogScraper()
    scraper.load_html("<html><body><p>점검 중</p></body></html>")
    with pytest.raises(ValueError):
        scraper.parse_entries()


def test_load_catalog_json(tmp_path):
    path = tmp_path / "timetable.json"
    path.write_text(json.dumps(RECORDS, ensure_ascii=False), encoding="utf-8")

    entries = load_catalog(str(path))
    assert len(entries) == 3
    assert entries[1].schedule == "금1"


def test_load_catalog_html(tmp_path):
    path = tmp_path / "catalog.html"
    path.write_text(CATALOG_HTML, encoding="utf-8")
    assert len(load_catalog(str(path))) == 2


def test_load_catalog_rejects_bad_input(tmp_path):
    csv_path = tmp_path / "catalog.csv"
    csv_path.write_text("a,b", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(csv_path))

    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(broken))

    not_list = tmp_path / "object.json"
    not_list.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(not_list))


def test_select_entries():
    catalog = [CourseEntry.from_record(r) for r in RECORDS]

    both_sections = select_entries(catalog, ["0000-1-3092-01"])
    assert [e.section for e in both_sections] == ["01", "02"]

    one_section = select_entries(catalog, ["0000-2-4512-02:01", "0000-1-3092-01:02", "0000-2-4512-02"])
    assert [e.key for e in one_section] == [("0000-2-4512-02", "01"), ("0000-1-3092-01", "02")]


def test_select_entries_unknown():
    with pytest.raises(ValueError):
        select_entries([], ["NOPE"])
