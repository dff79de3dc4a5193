import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from ga_tsp.data import Problem, generate_problems, load_problems
from ga_tsp.evaluation import reference_length, summarize
from ga_tsp.island import PoolConfig, RunResult, WorkerPool
from ga_tsp.render import image_name, save_tour_image
from ga_tsp.report import write_reports


logger = logging.getLogger("ga_tsp")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def build_problems(cfg: PoolConfig, data_root: Optional[str] = None) -> List[Problem]:
    if data_root:
        root = Path(data_root)
        problems = load_problems(root, max_problems=cfg.problems)
        if not problems:
            raise RuntimeError(
                f"No TSPLIB instances found in {root}. "
                "Place EUC_2D .tsp (and optional .opt.tour) files there before running."
            )
        return problems
    return generate_problems(
        cfg.problems, cfg.cities, cfg.width, cfg.height, random.Random(cfg.random_seed)
    )


def write_images(cfg: PoolConfig, results: List[RunResult]) -> None:
    images_dir = Path(cfg.output_dir) / cfg.images_dir
    for result in results:
        if not result.ok:
            continue
        save_tour_image(
            images_dir / image_name(result.worker_name, result.problem_num),
            result.tour,
            width=cfg.width,
            height=cfg.height,
            node_size=cfg.node_size,
        )


def log_summary(problems: List[Problem], results: List[RunResult]) -> None:
    references: Dict[int, float] = {}
    for idx, problem in enumerate(problems):
        references[idx] = problem.optimum if problem.optimum is not None else reference_length(problem.cities)
    for summary in summarize(results, references):
        logger.info(
            "problem %d: best=%.2f mean=%.2f reference=%.2f gap=%.2f%% failures=%d/%d",
            summary.problem_num,
            summary.best,
            summary.mean,
            summary.reference,
            summary.gap * 100,
            summary.failures,
            summary.runs,
        )


def run(args) -> None:
    t0 = time.perf_counter()
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key in PoolConfig.__dataclass_fields__ and value is not None
    }
    cfg = PoolConfig(**overrides)
    cfg.validate()
    problems = build_problems(cfg, args.data_root)
    logger.info(
        "solving %d problems with %d workers: generations=%d population=%d "
        "mutation=%.3f crossover=%.3f",
        len(problems),
        cfg.workers,
        cfg.generations,
        cfg.population_size,
        cfg.mutation_rate,
        cfg.crossover_rate,
    )
    results = WorkerPool(cfg, problems).run()
    out = Path(cfg.output_dir)
    write_images(cfg, results)
    write_reports(results, out / cfg.results_txt, out / cfg.results_csv)
    log_summary(problems, results)
    failures = sum(1 for r in results if not r.ok)
    if failures:
        logger.warning("%d of %d runs failed; see the log above", failures, len(results))
    logger.info("collected %d results in %.2fs", len(results), time.perf_counter() - t0)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Parallel genetic-algorithm TSP solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-generation progress")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for every (worker, problem) pair")
    run_parser.add_argument("--data-root", default=None, help="Directory of TSPLIB .tsp files")
    run_parser.add_argument("--workers", type=int)
    run_parser.add_argument("--problems", type=int)
    run_parser.add_argument("--cities", type=int)
    run_parser.add_argument("--generations", type=int)
    run_parser.add_argument("--population-size", type=int)
    run_parser.add_argument("--mutation-rate", type=float)
    run_parser.add_argument("--crossover-rate", type=float)
    run_parser.add_argument("--patience", type=int)
    run_parser.add_argument("--random-seed", type=int)
    run_parser.add_argument("--log-interval", type=int)
    run_parser.add_argument("--width", type=int)
    run_parser.add_argument("--height", type=int)
    run_parser.add_argument("--node-size", type=int)
    run_parser.add_argument("--executor", choices=["thread", "process"])
    run_parser.add_argument("--output-dir")
    run_parser.add_argument("--images-dir")
    run_parser.add_argument("--results-txt")
    run_parser.add_argument("--results-csv")
    run_parser.set_defaults(func=run)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (ValueError, RuntimeError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
