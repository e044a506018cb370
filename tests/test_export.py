import csv
import json

import pytest

from bullwhip.engine import run_full_sim
from bullwhip.export import CSV_HEADER, RunStore, history_rows, write_history_csv
from bullwhip.scenarios import SCENARIOS


def test_csv_column_order(tmp_path):
    result = run_full_sim("NAIVE", SCENARIOS["COVID_SHOCK"].config)
    path = write_history_csv(result['history'], str(tmp_path / "run.csv"))

    with open(path, newline='') as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADER
    assert len(rows) == 101

    h = result['history'][19]
    assert rows[20] == [str(v) for v in (
        h['tick'], h['customer_demand'],
        h['retailer']['inventory'], h['wholesaler']['inventory'], h['factory']['inventory'],
        h['retailer']['last_order_placed'], h['wholesaler']['last_order_placed'],
        h['factory']['last_order_placed'])]


def test_history_rows_empty():
    assert history_rows([]) == []


def test_run_store_round_trip(tmp_path):
    store = RunStore(str(tmp_path / "runs"))
    assert store.list_runs() == []

    store.save({'id': "a", 'timestamp': 100, 'factory_bw': 2.5})
    store.save({'id': "b", 'timestamp': 300, 'factory_bw': 1.1})
    store.save({'id': "c", 'timestamp': 200, 'factory_bw': 0.9})
    assert [r['id'] for r in store.list_runs()] == ["b", "c", "a"]

    store.delete("c")
    assert [r['id'] for r in store.list_runs()] == ["b", "a"]


def test_run_store_skips_unreadable_and_foreign_files(tmp_path):
    store = RunStore(str(tmp_path))
    store.save({'id': "ok", 'timestamp': 1})
    (tmp_path / "sc_run_broken.json").write_text("{not json")
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "other.json").write_text(json.dumps({'id': "other"}))
    assert [r['id'] for r in store.list_runs()] == ["ok"]


def test_run_store_delete_unknown(tmp_path):
    with pytest.raises(FileNotFoundError):
        RunStore(str(tmp_path)).delete("missing")
