"""Export of repository rules to JSON or CSV."""

import csv
import json
import logging
from typing import Iterable, List, TextIO

from versioning.models import RepositoryRule

logger = logging.getLogger(__name__)

CSV_HEADERS = ["name", "importpath", "commit", "tag"]


def rules_to_json(rules: Iterable[RepositoryRule]) -> str:
    """Serialize rules as a JSON array."""
    return json.dumps([r.to_dict() for r in rules], ensure_ascii=False, indent=4)


def write_csv(rules: Iterable[RepositoryRule], stream: TextIO) -> None:
    """Write rules as CSV rows (with header) to an open text stream."""
    rows: List[List[str]] = [CSV_HEADERS]
    for rule in rules:
        rows.append([rule.name, rule.importpath, rule.commit, rule.tag])
    csv.writer(stream).writerows(rows)


def export_json(rules, path):
    """Exports the repository rules to a JSON file.

    Args:
        rules (list): List of RepositoryRule instances.
        path (str): File path to export the JSON.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, 'w', encoding='utf-8') as file:
        file.write(rules_to_json(rules))
        file.write("\n")
    logger.info("JSON file has been successfully exported at: %s", path)


def export_csv(rules, path):
    """Exports the repository rules to a CSV file.

    Args:
        rules (list): List of RepositoryRule instances.
        path (str): File path to export the CSV.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, 'w', newline='', encoding='utf-8') as file:
        write_csv(rules, file)
    logger.info("CSV file has been successfully exported at: %s", path)
