"""Unit tests for the command-line interface."""

import json
import logging

import pytest

from shelfscan.scraper.cli import EXIT_BLOCKED, EXIT_ERROR, EXIT_OK, main
from shelfscan.utils.logger import set_package_log_level


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run from an empty directory so no config/config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_log_level():
    """Put package loggers back to INFO after a run changes them."""
    yield
    set_package_log_level("INFO")


@pytest.fixture
def search_file(workdir, search_page_html):
    path = workdir / "search.html"
    path.write_text(search_page_html, encoding="utf-8")
    return path


@pytest.fixture
def product_file(workdir, product_page_html):
    path = workdir / "dp.html"
    path.write_text(product_page_html, encoding="utf-8")
    return path


class TestSearchCommand:
    """Test the search subcommand."""

    def test_search_prints_products(self, search_file, capsys):
        exit_code = main(["search", str(search_file), "--query", "wireless mouse"])

        assert exit_code == EXIT_OK
        out = capsys.readouterr().out
        assert "B08N5WRWNW" in out
        assert "99.99 USD" in out
        assert "Products: 2" in out

    def test_search_json_output(self, search_file, workdir):
        output = workdir / "out" / "results.json"
        exit_code = main([
            "search", str(search_file), "--query", "wireless mouse",
            "--page", "1", "--output", str(output),
        ])

        assert exit_code == EXIT_OK
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["total_results"] == 10000
        assert [p["asin"] for p in data["products"]] == ["B08N5WRWNW", "B09HMZ6S1Y"]

    def test_search_filters(self, search_file, workdir):
        output = workdir / "results.json"
        exit_code = main([
            "search", str(search_file), "--query", "mouse",
            "--no-sponsored", "--min-rating", "4.5", "--output", str(output),
        ])

        assert exit_code == EXIT_OK
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [p["asin"] for p in data["products"]] == ["B08N5WRWNW"]

    def test_search_csv_output(self, search_file, workdir):
        csv_path = workdir / "products.csv"
        assert main(["search", str(search_file), "--query", "mouse", "--csv", str(csv_path)]) == EXIT_OK
        assert csv_path.read_text(encoding="utf-8").count("\n") == 3

    def test_config_file_filters_apply(self, search_file, workdir):
        config_path = workdir / "custom.yaml"
        config_path.write_text("filters:\n  prime_only: true\n", encoding="utf-8")
        output = workdir / "results.json"

        exit_code = main([
            "search", str(search_file), "--query", "mouse",
            "--config", str(config_path), "--output", str(output),
        ])

        assert exit_code == EXIT_OK
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [p["asin"] for p in data["products"]] == ["B08N5WRWNW"]

    def test_captcha_exit_code(self, workdir, captcha_page_html, capsys):
        path = workdir / "captcha.html"
        path.write_text(captcha_page_html, encoding="utf-8")

        assert main(["search", str(path), "--query", "mouse"]) == EXIT_BLOCKED
        assert "Page blocked" in capsys.readouterr().out

    def test_unknown_region(self, search_file):
        assert main(["search", str(search_file), "--query", "mouse", "--region", "atlantis"]) == EXIT_ERROR

    def test_missing_file(self, workdir):
        assert main(["search", str(workdir / "nope.html"), "--query", "mouse"]) == EXIT_ERROR

    def test_invalid_price_bounds(self, search_file):
        exit_code = main([
            "search", str(search_file), "--query", "mouse",
            "--min-price", "50", "--max-price", "10",
        ])
        assert exit_code == EXIT_ERROR

    def test_missing_config_file(self, search_file, workdir):
        exit_code = main([
            "search", str(search_file), "--query", "mouse",
            "--config", str(workdir / "missing.yaml"),
        ])
        assert exit_code == EXIT_ERROR

    def test_empty_file(self, workdir):
        path = workdir / "empty.html"
        path.write_text("  \n", encoding="utf-8")
        assert main(["search", str(path), "--query", "mouse"]) == EXIT_ERROR

    def test_query_required(self, search_file):
        with pytest.raises(SystemExit):
            main(["search", str(search_file)])


class TestProductCommand:
    """Test the product subcommand."""

    def test_product_from_url(self, product_file, capsys):
        exit_code = main([
            "product", str(product_file),
            "--asin", "https://www.amazon.com/dp/B08N5WRWNW",
        ])

        assert exit_code == EXIT_OK
        out = capsys.readouterr().out
        assert "Brand: Logitech" in out
        assert "Discount: 23%" in out

    def test_product_json_output(self, product_file, workdir):
        output = workdir / "product.json"
        assert main(["product", str(product_file), "--output", str(output)]) == EXIT_OK

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["asin"] == "B08N5WRWNW"
        assert data["in_stock"] is True

    def test_product_region(self, product_file, workdir):
        output = workdir / "product.json"
        exit_code = main([
            "product", str(product_file), "--region", "uk", "--output", str(output),
        ])

        assert exit_code == EXIT_OK
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["url"] == "https://www.amazon.co.uk/dp/B08N5WRWNW"
        assert data["price"]["currency"] == "GBP"

    def test_missing_title_exit_code(self, workdir):
        path = workdir / "empty.html"
        path.write_text("<html><body></body></html>", encoding="utf-8")
        assert main(["product", str(path), "--asin", "B08N5WRWNW"]) == EXIT_ERROR


class TestLogLevel:
    """Test that the chosen level reaches the extraction loggers."""

    def test_flag_applies_to_extraction_loggers(self, search_file):
        assert main(["search", str(search_file), "--query", "mouse", "--log-level", "DEBUG"]) == EXIT_OK

        for name in ("shelfscan.scraper.parsers", "shelfscan.scraper.blocking", "shelfscan.scraper.cli"):
            assert logging.getLogger(name).getEffectiveLevel() == logging.DEBUG

    def test_config_level_applies_to_extraction_loggers(self, search_file, workdir):
        config_path = workdir / "quiet.yaml"
        config_path.write_text("log_level: ERROR\n", encoding="utf-8")

        assert main(["search", str(search_file), "--query", "mouse", "--config", str(config_path)]) == EXIT_OK

        parser_logger = logging.getLogger("shelfscan.scraper.parsers")
        assert parser_logger.getEffectiveLevel() == logging.ERROR
        assert all(h.level == logging.ERROR for h in parser_logger.handlers)
