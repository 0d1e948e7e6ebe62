from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from browser_worktime.cli import app

runner = CliRunner()


def test_summary_prints_days(history_csv: Path) -> None:
    result = runner.invoke(app, ["summary", str(history_csv)])
    assert result.exit_code == 0, result.output
    assert "Day: 03.02.2023 Browser time: 07:05 - 08:00; Duration: 0:15:00" in result.output
    assert "Days with work: 2" in result.output


def test_summary_with_custom_thresholds(history_csv: Path) -> None:
    result = runner.invoke(
        app, ["summary", str(history_csv), "--absence-minutes", "40", "--work-start", "08:00"]
    )
    assert result.exit_code == 0, result.output
    # With 40 minutes every gap on 03.02 before 08:15 is presence, so the
    # whole morning from 06:30 forms one block.
    assert "Day: 03.02.2023 Browser time: 08:00 - 08:00; Duration: 1:30:00" in result.output


def test_report_writes_file(history_csv: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "reports"
    result = runner.invoke(app, ["report", str(history_csv), "--output-dir", str(out_dir)])
    assert result.exit_code == 0, result.output
    reports = list(out_dir.glob("Report *.txt"))
    assert len(reports) == 1
    assert reports[0].read_text(encoding="utf-8").splitlines() == [
        "Day: 03.02.2023 Browser time: 07:05 - 08:00; Duration: 0:15:00",
        "Day: 06.02.2023 Browser time: 08:00 - 08:10; Duration: 0:10:00",
    ]


def test_report_uses_default_history(history_csv: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["report", "--start", "2023-02-06"])
    assert result.exit_code == 0, result.output
    (report,) = tmp_path.glob("Report *.txt")
    assert report.read_text(encoding="utf-8").startswith("Day: 06.02.2023")


def test_missing_history_fails(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["summary"])
    assert result.exit_code == 1
    assert "history*.csv" in result.output


def test_single_visit_has_no_data(write_history) -> None:
    path = write_history([("2023-02-03", "09:00:00", "only", "https://a")])
    result = runner.invoke(app, ["summary", str(path)])
    assert result.exit_code == 1
    assert "No history records" in result.output


def test_invalid_date_option(history_csv: Path) -> None:
    result = runner.invoke(app, ["summary", str(history_csv), "--start", "03.02.2023"])
    assert result.exit_code == 2


def test_end_before_start(history_csv: Path) -> None:
    result = runner.invoke(
        app, ["summary", str(history_csv), "--start", "2023-02-06", "--end", "2023-02-03"]
    )
    assert result.exit_code == 1
    assert "end date" in result.output
