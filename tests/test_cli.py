from __future__ import annotations

from irisrap.__main__ import main


def test_cli_runs_pipeline(tmp_path, config_defaults_yaml, capsys):
    cfg = tmp_path / "config.defaults.yaml"
    cfg.write_text(config_defaults_yaml, encoding="utf-8")
    run_dir = tmp_path / "out"

    code = main(["--config", str(cfg), "--run-dir", str(run_dir), "--categories", "setosa", "versicolor"])

    assert code == 0
    assert (run_dir / "artifacts" / "report.md").exists()
    assert "Done: wrote" in capsys.readouterr().out
    summary = (run_dir / "artifacts" / "summary.csv").read_text(encoding="utf-8")
    assert "virginica" not in summary


def test_cli_reports_config_errors(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.yaml"), "--run-dir", str(tmp_path / "out")])

    assert code == 1
    assert "irisrap: error:" in capsys.readouterr().err
