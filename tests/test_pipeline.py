"""
Test suite for the processing pipeline, exports and entry point
File: tests/test_pipeline.py
"""

from docx import Document
from openpyxl import load_workbook

from journey_analytics.config.settings import Settings, PathSettings, TimeSettings
from journey_analytics.core.models import RejectionReason
from journey_analytics.main import main
from journey_analytics.reports.report_generator import ReportGenerator
from journey_analytics.services.pipeline import ProcessingPipeline


BATCH_LINES = [
    # 100 minutes, 100 km
    "J1,D1,1633420800000,1633426800000,34.0,-118.0,34.1,-118.1,1000.0,1100.0",
    # 30 minutes, 30 km
    "J2,D2,1633420800000,1633422600000,34.0,-118.0,34.1,-118.1,500.0,530.0",
    # end before start
    "J3,D2,1633422600000,1633420800000,34.0,-118.0,34.1,-118.1,530.0,560.0",
    # unparseable start time
    "J4,D3,later,1633422600000,34.0,-118.0,34.1,-118.1,10.0,20.0",
    # 120 minutes, 50 km
    "J5,D2,1633430000000,1633437200000,34.0,-118.0,34.1,-118.1,530.0,580.0",
    # too few fields
    "J6,D3,1633420800000",
]


class TestProcessingPipeline:
    """Test suite for ProcessingPipeline."""

    def setup_method(self):
        """Setup test fixtures."""
        self.rejections = []

    def make_pipeline(self, tmp_path):
        settings = Settings(
            paths=PathSettings(data_dir=tmp_path, output_dir=tmp_path / "result"),
            time=TimeSettings(timezone="America/Los_Angeles"),
        )
        return settings, ProcessingPipeline(settings, sink=self.rejections.append)

    def write_batch(self, tmp_path, lines=BATCH_LINES):
        path = tmp_path / "journeys_2021-10-05.csv"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    def test_run_answers_daily_queries(self, tmp_path):
        settings, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(self.write_batch(tmp_path), export=False)

        assert result.success
        assert result.batch_date == "2021-10-05"
        assert result.total_lines == 6
        assert [j.journey_id for j in result.journeys] == ["J1", "J2", "J5"]
        assert [j.journey_id for j in result.duration_matches] == ["J1", "J5"]
        assert [j.journey_id for j in result.speed_matches] == ["J1", "J2", "J5"]
        assert result.mileage_by_driver == {"D1": 100.0, "D2": 80.0}
        assert result.most_active_driver == "D1"
        assert not (tmp_path / "result").exists()

    def test_rejections_reach_sink(self, tmp_path):
        _, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(self.write_batch(tmp_path), export=False)

        assert self.rejections == result.rejections
        assert result.rejection_counts() == {
            RejectionReason.MALFORMED_FORMAT: 1,
            RejectionReason.PARSE_FAILURE: 1,
            RejectionReason.INVALID_DATA: 1,
        }

    def test_blank_lines_count_as_malformed(self, tmp_path):
        _, pipeline = self.make_pipeline(tmp_path)
        lines = BATCH_LINES[:2] + ["", "   "] + BATCH_LINES[2:]
        result = pipeline.run(self.write_batch(tmp_path, lines), export=False)

        assert result.total_lines == 8
        assert [j.journey_id for j in result.journeys] == ["J1", "J2", "J5"]
        assert result.rejection_counts()[RejectionReason.MALFORMED_FORMAT] == 3

    def test_missing_file_fails_before_cleaning(self, tmp_path):
        _, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(tmp_path / "nope.csv")

        assert not result.success
        assert result.message.startswith("File not found")
        assert result.journeys == []
        assert result.processing_errors

    def test_only_invalid_lines(self, tmp_path):
        _, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(self.write_batch(tmp_path, BATCH_LINES[2:4]), export=False)

        assert result.success
        assert not result.has_journeys
        assert result.mileage_by_driver == {}
        assert result.most_active_driver is None

    def test_export_workbook(self, tmp_path):
        settings, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(self.write_batch(tmp_path))

        assert result.success
        assert result.processing_errors == []

        wb = load_workbook(settings.workbook_path)
        assert wb.sheetnames == ["Journeys", "Long Journeys", "Average Speed", "Driver Mileage"]

        ws = wb["Driver Mileage"]
        assert [cell.value for cell in ws[1]] == ["driverId", "totalMileageKm"]
        assert ws["A2"].value == "D1"
        assert ws["B2"].value == 100.0
        assert ws.max_row == 3
        assert ws["A2"].font.b
        assert not ws["A3"].font.b

        assert wb["Long Journeys"].max_row == 3
        # J1 belongs to D1 but only the mileage sheet marks the most active driver
        assert wb["Journeys"]["B2"].value == "D1"
        assert not wb["Journeys"]["B2"].font.b

    def test_report_document(self, tmp_path):
        settings, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(self.write_batch(tmp_path), export=False)

        path = ReportGenerator(settings).generate(result, tmp_path / "report.docx")

        doc = Document(str(path))
        text = "\n".join(p.text for p in doc.paragraphs)
        assert "Batch date: 2021-10-05" in text
        assert "Most active driver: D1" in text
        assert len(doc.tables) == 3

    def test_report_skipped_on_failure(self, tmp_path):
        settings, pipeline = self.make_pipeline(tmp_path)
        result = pipeline.run(tmp_path / "nope.csv")

        assert ReportGenerator(settings).generate(result, tmp_path / "report.docx") is None


class TestMain:
    """Test suite for the command-line entry point."""

    def test_main_prints_daily_sections(self, tmp_path, capsys):
        path = tmp_path / "2021-10-05.csv"
        path.write_text("\n".join(BATCH_LINES) + "\n", encoding="utf-8")

        exit_code = main([str(path), "--timezone", "UTC", "--no-export"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Batch Date: 2021-10-05" in out
        assert "Journeys of 90.0 minutes or more:" in out
        assert "D2 drove 80.0 kilometers" in out
        assert "Most active driver is D1" in out

    def test_main_min_duration_override(self, tmp_path, capsys):
        path = tmp_path / "2021-10-05.csv"
        path.write_text("\n".join(BATCH_LINES) + "\n", encoding="utf-8")

        exit_code = main([str(path), "2021-10-06", "--min-duration", "500", "--no-export"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Batch Date: 2021-10-06" in out
        assert "No journeys matching the duration criteria." in out

    def test_main_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.csv"), "--no-export"]) == 1
