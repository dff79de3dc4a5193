import logging
import random

from ga_tsp.data import generate_problems
from ga_tsp.evaluation import reference_length
from ga_tsp.island import PoolConfig, WorkerPool


def main():
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(message)s", datefmt="%H:%M:%S")
    cfg = PoolConfig(
        workers=4,
        problems=2,
        cities=16,
        generations=2_000,
        population_size=50,
        random_seed=123,
        log_interval=500,
    )
    problems = generate_problems(cfg.problems, cfg.cities, cfg.width, cfg.height, random.Random(cfg.random_seed))
    results = WorkerPool(cfg, problems).run()
    for idx, problem in enumerate(problems):
        best = min((r for r in results if r.problem_num == idx), key=lambda r: r.distance)
        ref = reference_length(problem.cities)
        print(f"problem {idx}: best={best.distance:.2f} ({best.worker_name}) christofides={ref:.2f}")


if __name__ == "__main__":
    main()
