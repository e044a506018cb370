"""
Export Module
=============
Per-tick CSV export of a history and the JSON store of saved run summaries.
"""

import csv
import json
import logging
import os

logger = logging.getLogger(__name__)


# Column order is a compatibility contract for CSV consumers
CSV_HEADER = ["tick", "demand", "ret_inv", "who_inv", "fac_inv", "ret_order", "who_order", "fac_order"]

RUN_FILE_PREFIX = "sc_run_"


def history_rows(history):
    """Rows of the CSV export, one per history record."""
    return [
        [h['tick'], h['customer_demand'],
         h['retailer']['inventory'], h['wholesaler']['inventory'], h['factory']['inventory'],
         h['retailer']['last_order_placed'], h['wholesaler']['last_order_placed'],
         h['factory']['last_order_placed']]
        for h in history
    ]


def write_history_csv(history, path):
    """
    Write a history as a comma-separated table.

    Args:
        history (list): History records
        path (str): Output file

    Returns:
        str: The path written
    """
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        writer.writerows(history_rows(history))

    logger.info("Exported %d ticks to %s", len(history), path)
    return path


class RunStore:
    """Saved run summaries, one JSON file per run in a directory."""

    def __init__(self, directory):
        self.directory = directory

    def __repr__(self):
        return f"RunStore({self.directory!r})"

    def _path(self, run_id):
        return os.path.join(self.directory, f"{RUN_FILE_PREFIX}{run_id}.json")

    def save(self, run):
        os.makedirs(self.directory, exist_ok=True)
        path = self._path(run['id'])
        with open(path, 'w') as f:
            json.dump(run, f, indent=2)
        logger.info("Saved run %s to %s", run['id'], path)
        return path

    def list_runs(self):
        """All saved runs, newest first. Unreadable files are skipped."""
        if not os.path.isdir(self.directory):
            return []

        runs = []
        for filename in os.listdir(self.directory):
            if not (filename.startswith(RUN_FILE_PREFIX) and filename.endswith(".json")):
                continue
            path = os.path.join(self.directory, filename)
            try:
                with open(path) as f:
                    runs.append(json.load(f))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Skipping unreadable run file %s: %s", path, exc)
        return sorted(runs, key=lambda r: r.get('timestamp', 0), reverse=True)

    def delete(self, run_id):
        """Remove a saved run; raises FileNotFoundError for unknown ids."""
        os.remove(self._path(run_id))
        logger.info("Deleted run %s", run_id)
