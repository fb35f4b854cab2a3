import csv
import io
from datetime import date, datetime

import pytest

from absensi.attendance.model import Location
from absensi.core.constants import DASHBOARD_LOAD_ERROR
from absensi.core.exceptions import ValidationError
from absensi.reports.service import CSV_FIELDS, DashboardService, map_link, tally


def _values(stats):
    return {s["name"]: s["value"] for s in stats}


def test_tally_counts_every_bucket_by_exact_status(attendance_repo):
    for status in ["Hadir", "Hadir", "Terlambat", "Izin", "Sakit", "WFH", "Dinas Luar", "Dinas Luar"]:
        attendance_repo.add(status=status)

    stats = tally(attendance_repo.records)

    assert [s["name"] for s in stats] == ["Hadir", "Terlambat", "Izin", "Sakit", "WFH", "Dinas"]
    assert _values(stats) == {"Hadir": 2, "Terlambat": 1, "Izin": 1, "Sakit": 1, "WFH": 1, "Dinas": 2}


def test_tally_ignores_unknown_and_case_mismatched_statuses(attendance_repo):
    for status in ["Hadir", "hadir", "Cuti", "Dinas"]:
        attendance_repo.add(status=status)

    stats = tally(attendance_repo.records)

    assert _values(stats)["Hadir"] == 1
    assert sum(s["value"] for s in stats) == 1
    assert sum(s["value"] for s in stats) <= len(attendance_repo.records)


def test_empty_range_gives_zero_bars_and_header_only_csv(attendance_repo):
    svc = DashboardService(attendance_repo)

    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-01-01", end="2026-01-31")

    assert data.records == []
    assert all(s["value"] == 0 for s in tally(data.records))
    content = svc.export_csv(data).decode("utf-8-sig")
    assert content.strip() == ",".join(CSV_FIELDS)


def test_range_is_inclusive_and_rows_match_records(attendance_repo):
    attendance_repo.add(date_str="2026-10-18", name="Andi")
    attendance_repo.add(date_str="2026-10-19", name="Budi")
    attendance_repo.add(date_str="2026-10-20", name="Citra")
    attendance_repo.add(date_str="2026-10-21", name="Dewi")
    svc = DashboardService(attendance_repo)

    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-20")
    rows = svc.table_rows(data)

    assert sorted(r["name"] for r in rows) == ["Budi", "Citra"]
    assert [r["date"] for r in rows] == ["2026-10-20", "2026-10-19"]


def test_table_row_time_badge_and_map(attendance_repo):
    attendance_repo.add(
        status="Terlambat",
        created_at=datetime(2026, 10, 19, 7, 42),
        location=Location(lat=-8.2192, lng=114.3691),
    )
    attendance_repo.add(status="Izin", created_at=None)
    svc = DashboardService(attendance_repo)
    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-19")

    rows = {r["status"]: r for r in svc.table_rows(data)}

    assert rows["Terlambat"]["time"] == "07.42"
    assert rows["Terlambat"]["css_class"] == "bg-warning text-dark"
    assert rows["Terlambat"]["map_url"] == "https://www.google.com/maps?q=-8.2192,114.3691"
    assert rows["Izin"]["time"] == "-"
    assert rows["Izin"]["css_class"] == "bg-primary"
    assert rows["Izin"]["map_url"] is None


def test_map_link_requires_location(attendance_repo):
    assert map_link(attendance_repo.add(location=None)) is None


def test_csv_columns_and_values(attendance_repo):
    attendance_repo.add(
        name="Budi",
        email="budi@example.com",
        status="Hadir",
        created_at=datetime(2026, 10, 19, 7, 5),
        location=Location(lat=-8.2, lng=114.3),
    )
    attendance_repo.add(name="Citra", email="citra@example.com", status="WFH", created_at=datetime(2026, 10, 19, 8, 0))
    svc = DashboardService(attendance_repo)
    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-19")

    raw = svc.export_csv(data)
    rows = list(csv.DictReader(io.StringIO(raw.decode("utf-8-sig"))))

    assert raw.startswith(b"\xef\xbb\xbf")
    assert len(rows) == len(data.records) == 2
    by_name = {r["Nama"]: r for r in rows}
    assert by_name["Budi"] == {
        "Nama": "Budi",
        "Email": "budi@example.com",
        "Status": "Hadir",
        "Tanggal": "2026-10-19",
        "Waktu": "19 Okt 2026 07.05",
        "Latitude": "-8.2",
        "Longitude": "114.3",
    }
    assert by_name["Citra"]["Latitude"] == ""
    assert by_name["Citra"]["Longitude"] == ""


def test_export_filename_uses_range(attendance_repo):
    svc = DashboardService(attendance_repo)
    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-01", end="2026-10-19")

    assert svc.export_filename(data) == "absensi_2026-10-01_2026-10-19.csv"


def test_failed_query_keeps_previous_result(attendance_repo):
    attendance_repo.add(date_str="2026-10-19")
    svc = DashboardService(attendance_repo)
    first = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-19")

    attendance_repo.fail_reads = True
    second = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-01", end="2026-10-31")

    assert second.error == DASHBOARD_LOAD_ERROR
    assert second.records == first.records
    assert (second.start, second.end) == ("2026-10-19", "2026-10-19")
    assert svc.last_loaded("admin-1") is first


def test_failed_first_query_is_empty_with_error(attendance_repo):
    attendance_repo.fail_reads = True
    svc = DashboardService(attendance_repo)

    data = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-19")

    assert data.records == []
    assert data.error == DASHBOARD_LOAD_ERROR
    assert svc.last_loaded("admin-1") is None


def test_loaded_for_matches_exact_range(attendance_repo):
    svc = DashboardService(attendance_repo)
    first = svc.build_dashboard(viewer_uid="admin-1", start="2026-10-19", end="2026-10-19")

    assert svc.loaded_for("admin-1", start="2026-10-19", end="2026-10-19") is first
    assert svc.loaded_for("admin-1", start="2026-10-18", end="2026-10-19") is None
    assert svc.loaded_for("admin-2", start="2026-10-19", end="2026-10-19") is None


def test_invalid_date_raises_validation_error(attendance_repo):
    with pytest.raises(ValidationError):
        DashboardService(attendance_repo).build_dashboard(viewer_uid="admin-1", start="19-10-2026", end="2026-10-19")


def test_default_range_is_today(attendance_repo):
    assert DashboardService(attendance_repo).default_range(date(2026, 10, 19)) == ("2026-10-19", "2026-10-19")
