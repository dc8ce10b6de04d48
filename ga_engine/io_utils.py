"""
I/O utilities for the GA engine.

Handles CSV export of fitness histories, Pareto sets and schedules,
YAML metadata sidecars, and output folder management.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import yaml

from .data_models import Individual


def _prepare_output(output_path: Union[str, Path], overwrite: bool) -> Path:
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def save_history_csv(
    history: Sequence[tuple],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a per-generation fitness history to CSV.

    CSV format:
        generation,best_fitness,phenotype
        0,0.3333,tobqzr...

    Args:
        history: (generation, best_fitness, phenotype) rows
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['generation', 'best_fitness', 'phenotype'])
        for generation, fitness, phenotype in history:
            writer.writerow([generation, fitness, phenotype])

    return output_path


def load_history_csv(csv_path: Union[str, Path]) -> List[tuple]:
    """
    Load a fitness history written by save_history_csv.

    Returns:
        List of (generation, best_fitness, phenotype) tuples

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    rows = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if not all(col in (reader.fieldnames or []) for col in ['generation', 'best_fitness', 'phenotype']):
            raise ValueError(
                f"Invalid CSV format in {csv_path}. Expected columns: generation,best_fitness,phenotype"
            )

        for row in reader:
            rows.append((int(row['generation']), float(row['best_fitness']), row['phenotype']))

    return rows


def save_pareto_csv(
    pareto_set: Sequence[Individual],
    output_path: Union[str, Path],
    objective_names: Sequence[str] = ('time', 'cost'),
    overwrite: bool = False
) -> Path:
    """
    Save a Pareto set to CSV, one row per member.

    CSV format:
        time,cost,genes
        1234.5,6789.0,3 17 19 0 ...

    Args:
        pareto_set: Archived individuals (in the order they should be written)
        output_path: Path for output CSV
        objective_names: Column names for the objective values
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(list(objective_names) + ['genes'])
        for member in pareto_set:
            genes = " ".join(str(gene) for gene in member.chromosome.genes)
            writer.writerow(list(member.fitness) + [genes])

    return output_path


def save_schedule_csv(
    breakdown: Dict[int, Dict],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a per-resource schedule breakdown to CSV.

    Args:
        breakdown: Mapping resource index -> {'resource', 'tasks', 'time', 'cost'}
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=[
            'resource', 'items_per_minute', 'costs_per_minute', 'tasks', 'time', 'cost'
        ])
        writer.writeheader()
        for resource_index, entry in breakdown.items():
            writer.writerow({
                'resource': resource_index,
                'items_per_minute': entry['resource'].items_per_minute,
                'costs_per_minute': entry['resource'].costs_per_minute,
                'tasks': " ".join(str(t) for t in entry['tasks']),
                'time': entry['time'],
                'cost': entry['cost'],
            })

    return output_path


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save run metadata to a YAML sidecar file.

    Args:
        metadata: Metadata dictionary (plain Python types)
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    metadata = dict(metadata)
    metadata.setdefault('saved_at', datetime.now().isoformat())

    with open(output_path, 'w') as f:
        yaml.dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path


def create_output_folder(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output folder of a run.

    Args:
        root: Output directory
        overwrite: If True, reuse an existing directory

    Returns:
        Path to the output folder

    Raises:
        FileExistsError: If folder already exists and overwrite=False
    """
    root = Path(root)

    if root.exists() and not overwrite:
        raise FileExistsError(f"Output folder already exists: {root}")

    root.mkdir(parents=True, exist_ok=True)
    return root


def load_metadata(metadata_path: Union[str, Path]) -> Optional[dict]:
    """Load a YAML sidecar written by save_metadata."""
    metadata_path = Path(metadata_path)

    if not metadata_path.exists():
        raise FileNotFoundError(f"Metadata file not found: {metadata_path}")

    with open(metadata_path, 'r') as f:
        return yaml.safe_load(f)
