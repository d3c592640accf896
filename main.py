from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from mda.datahub import example_clusters, example_loadings, load_clusters, load_loadings
from mda.metrics import (
    PERFECTLY_TIDY,
    RaiseOnDegenerate,
    TidinessConfig,
    TidinessResult,
    compare_models,
    comparison_frame,
    compute_tidiness,
    compute_tidiness_reference,
)

app = typer.Typer(help="Tidiness of cluster solutions against factor solutions.")


def _build_config(unmatched: str, degenerate: str, verbose: bool) -> TidinessConfig:
    if unmatched not in ("drop", "error"):
        raise typer.BadParameter("--unmatched must be 'drop' or 'error'.")
    if degenerate == "error":
        policy = RaiseOnDegenerate()
    elif degenerate == "one":
        policy = PERFECTLY_TIDY
    else:
        raise typer.BadParameter("--degenerate must be 'error' or 'one'.")
    return TidinessConfig(unmatched=unmatched, degenerate_policy=policy, verbose=verbose)  # type: ignore[arg-type]


def _parse_layout(layout: Optional[str]) -> Optional[str]:
    if layout is not None and layout not in ("wide", "long"):
        raise typer.BadParameter("--layout must be 'wide' or 'long'.")
    return layout


def _echo_result(result: TidinessResult) -> None:
    typer.echo(f"tidiness            {result.score:.6f}")
    typer.echo(f"mutual information  {result.mutual_information:.6f} bits")
    typer.echo(f"joint entropy       {result.joint_entropy:.6f} bits")
    typer.echo(f"clusters × factors  {result.n_clusters} × {result.n_factors}")
    if result.degenerate:
        typer.echo("note: joint entropy is zero; score set by the degenerate policy")
    if result.dropped_features:
        dropped = ", ".join(str(feature) for feature in result.dropped_features)
        typer.echo(f"dropped features    {dropped}")


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def score(
    clusters: Path = typer.Option(..., "--clusters", help="CSV with feature and cluster columns."),
    loadings: Path = typer.Option(..., "--loadings", help="CSV of factor loadings."),
    layout: Optional[str] = typer.Option(
        None,
        "--layout",
        help="Loading table layout: wide (one column per factor) or long (feature, factor, loading). Inferred if omitted.",
    ),
    unmatched: str = typer.Option(
        "drop",
        "--unmatched",
        help="Features in only one table: drop them or raise an error.",
        show_default=True,
    ),
    degenerate: str = typer.Option(
        "error",
        "--degenerate",
        help="Zero joint entropy: report an error, or score it as one (perfectly tidy).",
        show_default=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print intermediate quantities."),
) -> None:
    """
    Compute the tidiness of one cluster solution against one factor solution.
    """
    config = _build_config(unmatched, degenerate, verbose)
    try:
        cluster_table = load_clusters(clusters)
        loading_table = load_loadings(loadings, layout=_parse_layout(layout))  # type: ignore[arg-type]
        result = compute_tidiness(cluster_table, loading_table, config)
    except (FileNotFoundError, ValueError) as exc:
        _fail(exc)
    _echo_result(result)


@app.command()
def compare(
    clusters: Path = typer.Option(..., "--clusters", help="CSV with feature and cluster columns."),
    loadings: List[str] = typer.Option(
        ...,
        "--loadings",
        help="Candidate model as NAME=PATH; repeat for every factor solution.",
    ),
    layout: Optional[str] = typer.Option(None, "--layout", help="Loading table layout shared by all candidates."),
    unmatched: str = typer.Option("drop", "--unmatched", show_default=True),
    degenerate: str = typer.Option(
        "error",
        "--degenerate",
        help="Zero joint entropy: report an error, or score it as one (perfectly tidy).",
        show_default=True,
    ),
    skip_degenerate: bool = typer.Option(
        False,
        "--skip-degenerate",
        help="With --degenerate error, list zero-entropy models without a score instead of aborting.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print intermediate quantities."),
) -> None:
    """
    Rank candidate factor solutions by their tidiness against a cluster solution.
    """
    config = _build_config(unmatched, degenerate, verbose)
    candidates = {}
    for entry in loadings:
        name, sep, raw_path = entry.partition("=")
        if not sep or not name or not raw_path:
            raise typer.BadParameter(f"Expected NAME=PATH, got '{entry}'.")
        if name in candidates:
            raise typer.BadParameter(f"Model name '{name}' given more than once.")
        candidates[name] = Path(raw_path)

    try:
        cluster_table = load_clusters(clusters)
        tables = {
            name: load_loadings(path, layout=_parse_layout(layout))  # type: ignore[arg-type]
            for name, path in candidates.items()
        }
        scores = compare_models(cluster_table, tables, config, skip_degenerate=skip_degenerate)
    except (FileNotFoundError, ValueError) as exc:
        _fail(exc)

    frame = comparison_frame(scores)
    typer.echo(frame.to_string(index=False, float_format=lambda value: f"{value:.6f}"))


@app.command()
def example(
    b_f1: float = typer.Option(0.05, "--b-f1", help="Loading of feature B on factor f1."),
    verbose: bool = typer.Option(False, "--verbose", help="Print intermediate quantities."),
) -> None:
    """
    Score the four-feature worked example (clusters c1={A,B}, c2={C,D}).
    """
    clusters = example_clusters()
    loadings = example_loadings(b_f1=b_f1)
    result = compute_tidiness(clusters, loadings, TidinessConfig(verbose=verbose))
    _echo_result(result)
    typer.echo(f"loop derivation     {compute_tidiness_reference(clusters, loadings):.6f}")


if __name__ == "__main__":
    app()
