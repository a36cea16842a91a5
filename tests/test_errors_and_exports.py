"""
Tests for domain errors and the CSV/PDF renderers
"""
from datetime import date
from io import BytesIO

from sportnest.core.errors import (
    CapacityExceededError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from sportnest.schemas.report import (
    ApprovedEventRow,
    EventKpis,
    EventsSummary,
    ReportFilters,
    StatusCount,
    VenueCount,
)
from sportnest.utils.csv_utils import _generate_csv_content
from sportnest.utils.pdf_generator import fit_text, generate_events_report_pdf


class TestDomainErrors:
    """Tests for the domain error hierarchy"""

    def test_codes_and_status(self):
        assert (NotFoundError("x").code, NotFoundError("x").status_code) == (ErrorCode.EVENT_NOT_FOUND, 404)
        assert (CapacityExceededError("x").code, CapacityExceededError("x").status_code) == (
            ErrorCode.CAPACITY_EXCEEDED, 409,
        )
        assert ForbiddenError().status_code == 403
        assert ValidationError("bad").status_code == 400

    def test_str_includes_code(self):
        assert str(CapacityExceededError("e1")) == "CAPACITY_EXCEEDED: Event is full"

    def test_from_errors_joins_messages(self):
        error = ValidationError.from_errors(["Venue is required", "Date is required"])

        assert error.message == "Venue is required • Date is required"
        assert error.errors == ["Venue is required", "Date is required"]

    def test_single_message_is_its_own_error_list(self):
        assert ValidationError("Name and email are required").errors == ["Name and email are required"]


class TestCsvContent:
    """Tests for _generate_csv_content"""

    def test_preamble_header_and_rows(self):
        content = _generate_csv_content(
            [{"name": "Run", "capacity": 10, "tags": ["a", "b"], "venue": None}],
            ["name", "capacity", "tags", "venue"],
            preamble=["SportNest Events Report", "Range", "2030-01-01", ""],
        )

        lines = content.splitlines()
        assert lines[0] == "SportNest Events Report,Range,2030-01-01,"
        assert lines[1] == "name,capacity,tags,venue"
        assert lines[2] == 'Run,10,"a,b",'

    def test_missing_keys_are_blank(self):
        content = _generate_csv_content([{"name": "Run"}], ["name", "venue"])

        assert content.splitlines() == ["name,venue", "Run,"]


class TestPdf:
    """Tests for the PDF report"""

    def test_fit_text_truncates(self):
        assert fit_text("Short", "Helvetica", 9, 200) == "Short"

        clipped = fit_text("A very long venue name " * 10, "Helvetica", 9, 80)
        assert clipped.endswith("...")
        assert len(clipped) < 60

    def test_report_spans_pages(self):
        """Test a long approved list renders to a valid PDF"""
        rows = [
            ApprovedEventRow(name=f"Event {i}", venue="Main Track", date="2030-02-01", time="08:00–10:00",
                             capacity=10, registered=i % 11, ratio=(i % 11) / 10)
            for i in range(50)
        ]
        summary = EventsSummary(
            kpis=EventKpis(events=50, capacity=500, regs=250),
            by_status=[StatusCount(status="approved", count=50)],
            trend=[],
            top_venues=[VenueCount(venue="Main Track", count=50)],
            approved_list=rows,
        )
        output = BytesIO()

        generate_events_report_pdf(summary, ReportFilters(date_from=date(2030, 1, 1)), output)

        pdf = output.getvalue()
        assert pdf.startswith(b"%PDF")
        assert pdf.count(b"/Type /Page") >= 2
