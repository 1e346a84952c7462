"""Unit tests for result persistence."""

import csv
import json

import pytest

from shelfscan.scraper.models import SearchResults
from shelfscan.scraper.storage import CSV_COLUMNS, export_products_to_csv, load_results, save_results


@pytest.fixture
def results(sample_products) -> SearchResults:
    return SearchResults(
        query="mouse",
        region="us",
        total_results=1200,
        products=sample_products,
        page=2,
        has_more=True,
    )


class TestJsonStorage:
    """Test JSON save and load."""

    def test_save_creates_parent_dirs(self, results, tmp_path):
        path = save_results(results, tmp_path / "out" / "results.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["query"] == "mouse"
        assert data["page"] == 2
        assert len(data["products"]) == 4
        assert data["products"][2]["price"]["is_hidden"] is True

    def test_load_saved(self, results, tmp_path):
        path = save_results(results, tmp_path / "results.json")
        assert load_results(path) == results

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_results(tmp_path / "nope.json")

    def test_non_ascii_kept(self, results, tmp_path):
        results.query = "kopfhörer"
        path = save_results(results, tmp_path / "results.json")
        assert "kopfhörer" in path.read_text(encoding="utf-8")


class TestCsvExport:
    """Test CSV export."""

    def test_rows_in_order(self, sample_products, tmp_path):
        path = export_products_to_csv(sample_products, tmp_path / "products.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert list(rows[0].keys()) == CSV_COLUMNS
        assert [r["asin"] for r in rows] == [p.asin for p in sample_products]

    def test_row_values(self, sample_products, tmp_path):
        path = export_products_to_csv(sample_products, tmp_path / "products.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert rows[0]["price"] == "19.99"
        assert rows[0]["is_prime"] == "True"
        assert rows[1]["original_price"] == "79.0"
        assert rows[1]["discount_percent"] == "25"
        # Hidden and missing prices export as empty cells
        assert rows[2]["price"] == ""
        assert rows[2]["currency"] == "USD"
        assert rows[3]["price"] == ""
        assert rows[3]["stars"] == "3.2"

    def test_empty_export_writes_header(self, tmp_path):
        path = export_products_to_csv([], tmp_path / "empty.csv")
        assert path.read_text(encoding="utf-8").strip() == ",".join(CSV_COLUMNS)
