"""CLI input handling; the scrape itself is covered in test_pipeline."""

import json

import pytest

from review_service.app.cli import build_parser, load_request, main
from review_service.app.errors import InputValidationError


def test_load_request_from_input_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({
        "url": "https://www.capterra.com/p/1/acme/reviews/",
        "start_date": "2024-01-01",
        "end_date": "2024-06-30",
    }))
    req = load_request(build_parser().parse_args(["--input", str(path)]))
    assert req.url == "https://www.capterra.com/p/1/acme/reviews/"
    assert req.start_date == "2024-01-01"
    assert req.end_date == "2024-06-30"


def test_flags_override_input_file():
    args = build_parser().parse_args([
        "--url", "https://www.g2.com/products/acme/reviews", "--start-date", "2024-01-01", "--end-date", "2024-02-01",
    ])
    assert load_request(args).url == "https://www.g2.com/products/acme/reviews"


def test_missing_input_file(tmp_path):
    with pytest.raises(InputValidationError):
        load_request(build_parser().parse_args(["--input", str(tmp_path / "nope.json")]))


def test_main_exits_1_on_unsupported_url(tmp_path, capsys):
    code = main(["--url", "https://example.com/x", "--start-date", "2024-01-01", "--end-date", "2024-02-01",
                 "--output-dir", str(tmp_path)])
    assert code == 1
    assert "Unsupported URL" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []
