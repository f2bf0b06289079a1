"""Integration tests for the scan -> batch -> submit pipeline and the CLI."""

import csv
import io
import json
import logging
import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from tracking_extractor import (
    CaptureSource,
    Carrier,
    Confidence,
    InMemoryReceivingService,
    ReceivingBatch,
    extract_tracking_numbers,
    summarize_carrier_mix,
)
from tracking_extractor.main import main


class TestReceivingPipeline:
    """A desk session: several scans, review, notes, submission."""

    def test_session(self, extractor, manifest_text):
        batch = ReceivingBatch(recipient_id="mb-101")
        service = InMemoryReceivingService(["MB-101"])

        first = batch.merge(extractor.extract(manifest_text), CaptureSource.LABEL)
        assert first.added_count == 3
        assert first.messages() == [
            "Added 3 tracking number(s) (UPS × 1, Amazon Logistics × 1, FedEx × 1).",
            "1 tracking number(s) need format review.",
        ]

        # Camera re-scan of the same UPS label plus a new DHL waybill
        second = batch.merge(
            extractor.extract("1Z 999 AA1 01 2345 6784\n1234567891"), CaptureSource.CAMERA
        )
        assert second.messages() == [
            "Skipped 1 duplicate tracking number(s).",
            "Added 1 tracking number(s) (DHL × 1).",
        ]

        batch.update_notes("96110209876543210987", "Check label, smudged")
        assert batch.count_label() == "4 packages ready to record"
        assert batch.summarize() == "Amazon Logistics × 1, DHL × 1, FedEx × 1, UPS × 1"

        payload = batch.to_submission().to_payload()
        assert payload["mailboxNumber"] == "MB-101"
        assert payload["packages"][2] == {
            "trackingNumber": "96110209876543210987",
            "notes": "Check label, smudged",
        }

        result = batch.submit(service)
        assert len(result.tracking_numbers) == 4
        assert len(batch) == 0

    def test_summary_of_extraction(self):
        text = "1Z999AA10123456784 1Z12345E6605272234 9400111899223856123459"
        assert summarize_carrier_mix(extract_tracking_numbers(text)) == "UPS × 2, USPS × 1"

    def test_concatenated_camera_scan(self):
        results = extract_tracking_numbers("1Z999AA101234567841Z12345E6605272234")

        assert len(results) == 2
        assert all(r.carrier is Carrier.UPS for r in results)
        assert all(r.confidence is Confidence.HIGH for r in results)


class TestCLI:
    """End-to-end tests for the command line interface."""

    def test_json_to_stdout(self, manifest_file, capsys):
        exit_code = main([str(manifest_file)])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert [d["trackingNumber"] for d in data] == [
            "1Z999AA10123456784",
            "TBA123456789012",
            "96110209876543210987",
        ]
        assert data[0]["source"] == "label"

    def test_csv_output_file(self, manifest_file, tmp_path):
        out = tmp_path / "batch.csv"
        exit_code = main([str(manifest_file), "-o", str(out), "--source", "camera"])

        assert exit_code == 0
        rows = list(csv.DictReader(io.StringIO(out.read_text(encoding="utf-8-sig"))))
        assert len(rows) == 3
        assert {row["source"] for row in rows} == {"camera"}

    def test_json_output_file(self, manifest_file, tmp_path):
        out = tmp_path / "batch.json"
        assert main([str(manifest_file), "-o", str(out), "--no-pretty"]) == 0

        assert len(json.loads(out.read_text(encoding="utf-8"))) == 3

    def test_format_override(self, manifest_file, capsys):
        assert main([str(manifest_file), "-f", "csv"]) == 0
        assert capsys.readouterr().out.startswith("tracking_number,carrier")

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("Ref 1234567891"))

        assert main(["-"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["carrier"] == "DHL"

    def test_duplicates_across_files(self, tmp_path, capsys):
        (tmp_path / "a.txt").write_text("1Z999AA10123456784", encoding="utf-8")
        (tmp_path / "b.txt").write_text("1Z999AA10123456784 TBA123456789012", encoding="utf-8")

        assert main([str(tmp_path / "*.txt")]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [d["trackingNumber"] for d in data] == ["1Z999AA10123456784", "TBA123456789012"]

    def test_summary_to_stderr(self, manifest_file, capsys):
        assert main([str(manifest_file), "--summary"]) == 0

        err = capsys.readouterr().err
        assert "3 packages ready to record" in err
        assert "Amazon Logistics × 1, FedEx × 1, UPS × 1" in err
        assert "1 tracking number needs format review." in err

    def test_no_numbers_found(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("random notes, no tracking here", encoding="utf-8")

        assert main([str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.txt")]) == 1

    def test_log_file(self, manifest_file, tmp_path, capsys):
        log_path = tmp_path / "desk.log"
        assert main([str(manifest_file), "--log-file", str(log_path)]) == 0

        root = logging.getLogger()
        for handler in root.handlers[:]:
            handler.flush()
            root.removeHandler(handler)
            handler.close()

        lines = log_path.read_text(encoding="utf-8").splitlines()
        events = [json.loads(line)["event"] for line in lines]
        assert "batch_summary" in events
        assert "batch_summary" not in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "tracking-extractor" in capsys.readouterr().out
