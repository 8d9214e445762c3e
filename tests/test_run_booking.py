import json

import run_booking
from scheduler import JsonFileAssignmentStore


def test_demo_books_once_and_rejects_the_repeat(tmp_path, monkeypatch, capsys):
    store_path = tmp_path / "assignments.json"
    monkeypatch.setattr(run_booking, "PROVIDERS_FILENAME", str(tmp_path / "missing.json"))
    monkeypatch.setattr(run_booking, "STORE_FILENAME", str(store_path))

    assert run_booking.main() == 0

    out = capsys.readouterr().out
    assert "Booked Acharya Raghavan" in out
    assert "confirmed=False, reason=BOOKING_CONFLICT" in out

    [record] = JsonFileAssignmentStore(store_path).list_assignments()
    assert record.provider_id == "prov_01"
    assert record.duration_minutes == 90


def test_demo_reads_provider_file(tmp_path, monkeypatch, capsys):
    providers_path = tmp_path / "providers.json"
    providers_path.write_text(json.dumps({"providers": [{
        "id": "only",
        "name": "Weekend Only",
        "working_days": [0, 6],
        "work_shifts": [{"start": "08:00", "end": "18:00"}],
        "location": "Chennai",
        "specialties": [run_booking.SERVICE_NAME],
        "service_modes": ["Offline"],
    }]}))
    monkeypatch.setattr(run_booking, "PROVIDERS_FILENAME", str(providers_path))
    monkeypatch.setattr(run_booking, "STORE_FILENAME", str(tmp_path / "assignments.json"))

    # The demo always asks for a Wednesday
    assert run_booking.main() == 1
    assert "OFF_DAY" in capsys.readouterr().out
