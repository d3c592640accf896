"""Tests for the Typer command-line interface."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from main import app
from mda.datahub import example_clusters, example_loadings
from mda.metrics.tidiness import tidiness_score

runner = CliRunner()


def _write_inputs(tmp_path: Path) -> tuple[Path, Path, Path]:
    clusters = tmp_path / "clusters.csv"
    clusters.write_text("feature,cluster\nA,c1\nB,c1\nC,c2\nD,c2\nE,c2\n", encoding="utf-8")

    clean = tmp_path / "clean.csv"
    clean.write_text("feature,f1,f2\nA,0.1,-0.5\nB,0.05,0.55\nC,0.6,-0.02\nD,-0.7,0.2\n", encoding="utf-8")

    split = tmp_path / "split.csv"
    split.write_text("feature,f1,f2\nA,0.1,-0.5\nB,0.6,0.55\nC,0.6,-0.02\nD,-0.7,0.2\n", encoding="utf-8")
    return clusters, clean, split


# ---------------------------------------------------------------------------
# score


def test_score_prints_tidiness_and_dropped_features(tmp_path: Path) -> None:
    clusters, clean, _ = _write_inputs(tmp_path)
    result = runner.invoke(app, ["score", "--clusters", str(clusters), "--loadings", str(clean)])

    assert result.exit_code == 0, result.output
    expected = tidiness_score(example_clusters(), example_loadings())
    assert f"tidiness            {expected:.6f}" in result.output
    assert "dropped features    E" in result.output


def test_score_fails_on_unmatched_when_strict(tmp_path: Path) -> None:
    clusters, clean, _ = _write_inputs(tmp_path)
    result = runner.invoke(
        app,
        ["score", "--clusters", str(clusters), "--loadings", str(clean), "--unmatched", "error"],
    )
    assert result.exit_code == 1
    assert "appear in only one table" in result.output


def test_score_degenerate_policy(tmp_path: Path) -> None:
    clusters = tmp_path / "clusters.csv"
    clusters.write_text("feature,cluster\nA,c1\n", encoding="utf-8")
    loadings = tmp_path / "loadings.csv"
    loadings.write_text("feature,f1\nA,0.4\n", encoding="utf-8")

    failed = runner.invoke(app, ["score", "--clusters", str(clusters), "--loadings", str(loadings)])
    assert failed.exit_code == 1
    assert "entropy is zero" in failed.output

    lenient = runner.invoke(
        app,
        ["score", "--clusters", str(clusters), "--loadings", str(loadings), "--degenerate", "one"],
    )
    assert lenient.exit_code == 0, lenient.output
    assert "tidiness            1.000000" in lenient.output


def test_score_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["score", "--clusters", str(tmp_path / "nope.csv"), "--loadings", str(tmp_path / "nope.csv")],
    )
    assert result.exit_code == 1
    assert "No such table" in result.output


@pytest.mark.parametrize("flag, value", [("--layout", "tall"), ("--unmatched", "skip"), ("--degenerate", "nan")])
def test_score_rejects_bad_options(tmp_path: Path, flag: str, value: str) -> None:
    clusters, clean, _ = _write_inputs(tmp_path)
    result = runner.invoke(app, ["score", "--clusters", str(clusters), "--loadings", str(clean), flag, value])
    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# compare


def test_compare_ranks_candidates(tmp_path: Path) -> None:
    clusters, clean, split = _write_inputs(tmp_path)
    result = runner.invoke(
        app,
        [
            "compare",
            "--clusters",
            str(clusters),
            "--loadings",
            f"split={split}",
            "--loadings",
            f"clean={clean}",
        ],
    )
    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if line.strip()]
    assert lines[0].split()[0] == "model"
    assert lines[1].split()[0] == "clean"
    assert lines[2].split()[0] == "split"


def test_compare_degenerate_policy(tmp_path: Path) -> None:
    clusters = tmp_path / "clusters.csv"
    clusters.write_text("feature,cluster\nA,c1\nB,c1\n", encoding="utf-8")
    collapsed = tmp_path / "collapsed.csv"
    collapsed.write_text("feature,f1\nA,0.4\nB,-0.3\n", encoding="utf-8")
    args = ["compare", "--clusters", str(clusters), "--loadings", f"collapsed={collapsed}"]

    failed = runner.invoke(app, args)
    assert failed.exit_code == 1
    assert "entropy is zero" in failed.output

    lenient = runner.invoke(app, args + ["--degenerate", "one"])
    assert lenient.exit_code == 0, lenient.output
    row = [line for line in lenient.output.splitlines() if line.strip().startswith("collapsed")][0]
    assert "1.000000" in row

    assert runner.invoke(app, args + ["--degenerate", "nan"]).exit_code == 2


def test_compare_rejects_malformed_candidate(tmp_path: Path) -> None:
    clusters, clean, _ = _write_inputs(tmp_path)
    result = runner.invoke(app, ["compare", "--clusters", str(clusters), "--loadings", str(clean)])
    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# example


def test_example_reports_both_derivations() -> None:
    result = runner.invoke(app, ["example"])
    assert result.exit_code == 0, result.output
    expected = tidiness_score(example_clusters(), example_loadings())
    assert f"tidiness            {expected:.6f}" in result.output
    assert f"loop derivation     {expected:.6f}" in result.output


def test_example_with_split_loading_is_less_tidy() -> None:
    clean = runner.invoke(app, ["example"])
    split = runner.invoke(app, ["example", "--b-f1", "0.6"])
    assert split.exit_code == 0, split.output

    def _score(output: str) -> float:
        line = next(line for line in output.splitlines() if line.startswith("tidiness"))
        return float(line.split()[-1])

    assert _score(split.output) < _score(clean.output)
