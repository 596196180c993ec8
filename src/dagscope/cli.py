"""dagscope CLI entry point.

Usage: dagscope [command]

  analyze   run the pipeline over JSON datasets, optionally writing CSV
  bench     run the pipeline over generated graphs and time it
"""
import argparse
import logging
import sys


def _add_analyze_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "analyze",
        help="Analyze JSON graph datasets.",
    )
    p.add_argument(
        "paths", nargs="*",
        help="Dataset files to analyze.",
    )
    p.add_argument(
        "--data-dir", default=None,
        help="Also analyze every *.json file in this directory.",
    )
    p.add_argument(
        "--source", type=int, default=None,
        help="Source node index for shortest paths "
             "(default: the dataset's 'source', else 0)",
    )
    p.add_argument(
        "--csv", default=None,
        help="Write the results table to this CSV file.",
    )
    p.add_argument(
        "--quiet", action="store_true",
        help="Only print the summary table, not per-dataset reports.",
    )


def _add_bench_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "bench",
        help="Analyze randomly generated graphs.",
    )
    p.add_argument(
        "--graphs", type=int, default=9,
        help="Number of graphs to generate (default: 9)",
    )
    p.add_argument(
        "--min-nodes", type=int, default=6,
        help="Smallest graph size (default: 6)",
    )
    p.add_argument(
        "--max-nodes", type=int, default=50,
        help="Largest graph size (default: 50)",
    )
    p.add_argument(
        "--edge-prob", type=float, default=0.15,
        help="Probability of each forward edge (default: 0.15)",
    )
    p.add_argument(
        "--cycle-prob", type=float, default=0.5,
        help="Probability that a graph gets planted cycles (default: 0.5)",
    )
    p.add_argument(
        "--weight-model", choices=("edge", "node"), default="edge",
        help="Weight model of the generated graphs (default: edge)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _run_analyze(args: argparse.Namespace) -> int:
    from dagscope.dataset.loader import list_datasets
    from dagscope.dataset.results import write_results_csv
    from dagscope.profiling.harness import run_batch
    from dagscope.profiling.report import format_report, format_summary_table

    paths = list(args.paths)
    if args.data_dir:
        try:
            paths.extend(list_datasets(args.data_dir))
        except NotADirectoryError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    if not paths:
        print("error: no datasets given (pass paths or --data-dir)", file=sys.stderr)
        return 2

    report = run_batch(paths, source=args.source)

    if not args.quiet:
        for result in report.results:
            print(format_report(result))
            print()
    print(format_summary_table(report.results))
    for name, reason in report.failures.items():
        print(f"FAILED {name}: {reason}")

    if args.csv:
        rows = write_results_csv(args.csv, report.results)
        print(f"Wrote {rows} row(s) to {args.csv}")

    return 1 if report.failures else 0


def _run_bench(args: argparse.Namespace) -> int:
    from dagscope.profiling.graph_generator import GraphGenerator
    from dagscope.profiling.harness import analyze_graph
    from dagscope.profiling.report import format_summary_table

    gen = GraphGenerator(
        num_graphs=args.graphs,
        min_nodes=args.min_nodes,
        max_nodes=args.max_nodes,
        edge_prob=args.edge_prob,
        cycle_prob=args.cycle_prob,
        weight_model=args.weight_model,
        seed=args.seed,
    )
    results = [
        analyze_graph(g, dataset=f"random_{i:02d}")
        for i, g in enumerate(gen.generate())
    ]
    print(format_summary_table(results))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="dagscope",
        description="SCC condensation, topological order and DAG path analysis.",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress (-v) or per-stage detail (-vv).",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_analyze_parser(subparsers)
    _add_bench_parser(subparsers)

    args = parser.parse_args()
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "analyze":
        sys.exit(_run_analyze(args))
    if args.command == "bench":
        sys.exit(_run_bench(args))
