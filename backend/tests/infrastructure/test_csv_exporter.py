"""CSV Order Exporter — header, rows, directory creation, overwrite, staging, failures."""

import csv
import os

import pytest

from storefront.core.domain_types import OrderRecord
from storefront.core.errors import ExportError
from storefront.infrastructure.csv_exporter import CsvOrderExporter


def _read(path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as fh:
        return list(csv.reader(fh))


def test_writes_header_and_rows_creating_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "ordenes.csv"
    records = [
        OrderRecord("25", "pikachu", "2"),
        OrderRecord("1", "bulbasaur", "5"),
    ]

    written = CsvOrderExporter(str(path)).export(records)

    assert written == str(path)
    assert _read(path) == [
        ["ID", "Nombre", "Cantidad"],
        ["25", "pikachu", "2"],
        ["1", "bulbasaur", "5"],
    ]


def test_each_export_replaces_the_previous_file(tmp_path):
    path = tmp_path / "ordenes.csv"
    exporter = CsvOrderExporter(str(path))

    exporter.export([OrderRecord("25", "pikachu", "2")])
    exporter.export([OrderRecord("4", "charmander", "1")])

    assert _read(path) == [["ID", "Nombre", "Cantidad"], ["4", "charmander", "1"]]
    assert [f for f in os.listdir(tmp_path) if f.endswith(".tmp")] == []


def test_unwritable_destination_raises_export_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    path = blocker / "ordenes.csv"

    with pytest.raises(ExportError) as exc:
        CsvOrderExporter(str(path)).export([OrderRecord("25", "pikachu", "2")])

    assert exc.value.path == str(path)


def test_staged_export_is_invisible_until_published(tmp_path):
    path = tmp_path / "ordenes.csv"
    exporter = CsvOrderExporter(str(path))

    staged = exporter.stage([OrderRecord("25", "pikachu", "2")])

    assert not path.exists()
    assert os.path.dirname(staged) == str(tmp_path)
    assert exporter.publish(staged) == str(path)
    assert _read(path) == [["ID", "Nombre", "Cantidad"], ["25", "pikachu", "2"]]
    assert os.listdir(tmp_path) == ["ordenes.csv"]


def test_discard_removes_staged_file_and_keeps_previous_export(tmp_path):
    path = tmp_path / "ordenes.csv"
    exporter = CsvOrderExporter(str(path))
    exporter.export([OrderRecord("25", "pikachu", "2")])

    staged = exporter.stage([OrderRecord("4", "charmander", "1")])
    exporter.discard(staged)
    exporter.discard(staged)

    assert os.listdir(tmp_path) == ["ordenes.csv"]
    assert _read(path) == [["ID", "Nombre", "Cantidad"], ["25", "pikachu", "2"]]
