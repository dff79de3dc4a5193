import csv
from pathlib import Path
from typing import Dict, Iterable, List, TextIO

from .island import RunResult


CSV_HEADERS = [
    "Thread Name",
    "Num Generations",
    "Population Size",
    "Mutation Rate",
    "Crossover Rate",
    "Problem Num",
    "Distance",
    "Elapsed Time",
]


def group_by_problem(results: Iterable[RunResult]) -> List[RunResult]:
    """Order results by problem index, keeping arrival order within a problem."""
    grouped: Dict[int, List[RunResult]] = {}
    for result in results:
        grouped.setdefault(result.problem_num, []).append(result)
    return [r for problem_num in sorted(grouped) for r in grouped[problem_num]]


def format_block(result: RunResult) -> str:
    return (
        f"Thread Name: {result.worker_name}\n"
        f"Genetic Parameters: numGenerations={result.generations} "
        f"populationSize={result.population_size} "
        f"mutationRate={result.mutation_rate:f} crossoverRate={result.crossover_rate:f}\n"
        f"Problem #{result.problem_num}\n"
        f"Distance: {result.distance:f}\n"
        f"Time taken: {result.elapsed:.6f}s\n\n"
    )


def csv_row(result: RunResult) -> List[str]:
    return [
        result.worker_name,
        str(result.generations),
        str(result.population_size),
        f"{result.mutation_rate:.6f}",
        f"{result.crossover_rate:.6f}",
        str(result.problem_num),
        f"{result.distance:.6f}",
        f"{result.elapsed:.6f}",
    ]


def write_text_report(results: Iterable[RunResult], out: TextIO) -> None:
    for result in results:
        out.write(format_block(result))


def write_csv_report(results: Iterable[RunResult], out: TextIO) -> None:
    writer = csv.writer(out)
    writer.writerow(CSV_HEADERS)
    for result in results:
        writer.writerow(csv_row(result))


def write_reports(results: Iterable[RunResult], txt_path: Path, csv_path: Path) -> None:
    ordered = group_by_problem(results)
    txt_path.parent.mkdir(parents=True, exist_ok=True)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with txt_path.open("w") as txt, csv_path.open("w", newline="") as csv_file:
        write_text_report(ordered, txt)
        write_csv_report(ordered, csv_file)
