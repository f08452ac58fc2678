from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

from career_scraper.extraction.errors import BrowserLaunchError
from career_scraper.extraction.models import (
    EducationRecord,
    ExperienceRecord,
    ProfileOutcome,
    RunResult,
)


def _write_config(tmp_path: Path, output_file: Path) -> Path:
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "urls": ["https://www.linkedin.com/in/a", "https://www.linkedin.com/in/b"],
                "selectors": {"experienceItem": "li.item", "jobTitle": "span.t"},
                "outputFile": str(output_file),
            }
        ),
        encoding="utf-8",
    )
    return config_file


def _result() -> RunResult:
    return RunResult(
        total_profiles=2,
        profiles=[
            ProfileOutcome(
                profile_url="https://www.linkedin.com/in/a",
                success=True,
                records=[
                    ExperienceRecord(
                        profile_url="https://www.linkedin.com/in/a", index=0, title="Dev"
                    ),
                    EducationRecord(
                        profile_url="https://www.linkedin.com/in/a", index=0, institution="MIT"
                    ),
                ],
            ),
            ProfileOutcome(
                profile_url="https://www.linkedin.com/in/b",
                success=False,
                error="Navigation to https://www.linkedin.com/in/b/details/experience failed: timeout",
            ),
        ],
    )


def test_cli_run_calls_scrape_service_and_writes_json(monkeypatch, tmp_path, capsys) -> None:
    from career_scraper.__main__ import main

    output_file = tmp_path / "out.json"
    config_file = _write_config(tmp_path, output_file)
    mock = AsyncMock(return_value=_result())
    monkeypatch.setattr("career_scraper.service.run_scrape", mock)

    exit_code = main(["run", str(config_file), "--yes"])

    assert exit_code == 0
    mock.assert_awaited_once()
    config = mock.await_args.args[0]
    assert config.profiles == [
        "https://www.linkedin.com/in/a",
        "https://www.linkedin.com/in/b",
    ]
    assert mock.await_args.kwargs["assume_yes"] is True
    assert mock.await_args.kwargs["headless"] is None

    data = json.loads(output_file.read_text(encoding="utf-8"))
    assert [p["success"] for p in data["profiles"]] == [True, False]

    out = capsys.readouterr().out
    assert f"Wrote: {output_file}" in out
    assert "Status: Failed" in out
    assert "Total experiences: 1, total education: 1" in out


def test_cli_run_output_override_writes_xlsx(monkeypatch, tmp_path) -> None:
    from career_scraper.__main__ import main

    config_file = _write_config(tmp_path, tmp_path / "ignored.json")
    monkeypatch.setattr(
        "career_scraper.service.run_scrape", AsyncMock(return_value=_result())
    )
    output_file = tmp_path / "custom.xlsx"

    exit_code = main(["run", str(config_file), "--output", str(output_file), "--headless"])

    assert exit_code == 0
    assert output_file.exists()
    assert not (tmp_path / "ignored.json").exists()


def test_cli_run_passes_headless_flag(monkeypatch, tmp_path) -> None:
    from career_scraper.__main__ import main

    config_file = _write_config(tmp_path, tmp_path / "out.json")
    mock = AsyncMock(return_value=_result())
    monkeypatch.setattr("career_scraper.service.run_scrape", mock)

    assert main(["run", str(config_file), "--headless"]) == 0
    assert mock.await_args.kwargs["headless"] is True


def test_cli_run_no_headless_forces_headed_browser(monkeypatch, tmp_path) -> None:
    from career_scraper.__main__ import main

    config_file = _write_config(tmp_path, tmp_path / "out.json")
    mock = AsyncMock(return_value=_result())
    monkeypatch.setattr("career_scraper.service.run_scrape", mock)

    assert main(["run", str(config_file), "--no-headless"]) == 0
    assert mock.await_args.kwargs["headless"] is False


def test_cli_run_invalid_config_exits_with_config_error(monkeypatch, tmp_path, capsys) -> None:
    from career_scraper.__main__ import main

    config_file = tmp_path / "config.json"
    config_file.write_text("{broken", encoding="utf-8")
    mock = AsyncMock()
    monkeypatch.setattr("career_scraper.service.run_scrape", mock)

    assert main(["run", str(config_file)]) == 2
    mock.assert_not_awaited()
    assert "Invalid JSON" in capsys.readouterr().err


def test_cli_run_missing_config_exits_with_config_error(tmp_path) -> None:
    from career_scraper.__main__ import main

    assert main(["run", str(tmp_path / "missing.json")]) == 2


def test_cli_run_browser_launch_failure_exits_with_failure(monkeypatch, tmp_path) -> None:
    from career_scraper.__main__ import main

    output_file = tmp_path / "out.json"
    config_file = _write_config(tmp_path, output_file)
    monkeypatch.setattr(
        "career_scraper.service.run_scrape",
        AsyncMock(side_effect=BrowserLaunchError("Failed to launch browser: no chromium")),
    )

    assert main(["run", str(config_file)]) == 1
    assert not output_file.exists()


def test_cli_without_mode_prints_help(capsys) -> None:
    from career_scraper.__main__ import main

    assert main([]) == 0
    assert "usage: career-scraper" in capsys.readouterr().out


def test_cli_parser_run_defaults() -> None:
    from career_scraper.__main__ import create_parser

    args = create_parser().parse_args(["run", "config.yaml"])

    assert args.mode == "run"
    assert args.config == Path("config.yaml")
    assert args.output is None
    assert args.format is None
    assert args.yes is False
    assert args.headless is None


def test_cli_parser_headless_flags() -> None:
    from career_scraper.__main__ import create_parser

    parser = create_parser()

    assert parser.parse_args(["run", "c.yaml", "--headless"]).headless is True
    assert parser.parse_args(["run", "c.yaml", "--no-headless"]).headless is False
