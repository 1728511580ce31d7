from __future__ import annotations

import pytest

from ledger_ingest.errors import UnrecognizedFormat
from ledger_ingest.ingest.detect import DIALECTS, detect_and_parse, detect_format
from tests.helpers.samples import (
    ALIOR_CSV,
    ALIOR_FILENAME,
    ALIOR_HEADER,
    PEKAO_CSV,
    PEKAO_FILENAME,
    REVOLUT_CSV,
    REVOLUT_FILENAME,
    double_encode,
)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        (ALIOR_FILENAME, "alior"),
        ("historia_operacji.CSV", "alior"),
        (PEKAO_FILENAME, "pekao"),
        ("LISTA_OPERACJI.csv", "pekao"),
        (REVOLUT_FILENAME, "revolut"),
        ("Revolut-luty.csv", "revolut"),
    ],
)
def test_filename_markers_are_case_insensitive(filename: str, expected: str) -> None:
    # Content is irrelevant once the filename matches
    assert detect_format(filename, "whatever").name == expected


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (ALIOR_CSV, "alior"),
        (ALIOR_HEADER + "\n", "alior"),
        (PEKAO_CSV, "pekao"),
        ("Data ksiegowania;Data waluty\n", "pekao"),
        (double_encode(PEKAO_CSV), "pekao"),
        ("Data ksi\u00c4\u2122gowania;Data waluty\n", "pekao"),
        ("X;Y;Kategoria\n", "pekao"),
        (REVOLUT_CSV, "revolut"),
        ("\ufeff" + REVOLUT_CSV, "revolut"),
    ],
)
def test_content_sniffing_for_unhelpful_filenames(content: str, expected: str) -> None:
    assert detect_format("upload.csv", content).name == expected


def test_only_first_three_lines_are_sniffed() -> None:
    content = "a,b\n1,2\n3,4\nRodzaj,Produkt\n"
    with pytest.raises(UnrecognizedFormat):
        detect_format("upload.csv", content)


def test_rodzaj_alone_is_not_revolut() -> None:
    with pytest.raises(UnrecognizedFormat):
        detect_format("upload.csv", "Rodzaj,Opis\n")


def test_unrecognized_format_names_supported_dialects() -> None:
    with pytest.raises(UnrecognizedFormat) as excinfo:
        detect_format("export.csv", "Date,Description,Amount\n01/02/2026,X,1.00\n")
    message = str(excinfo.value)
    assert "Alior (Historia_Operacji_*)" in message
    assert "Pekao (Lista_operacji_*)" in message
    assert "Revolut (account-statement_*)" in message


def test_filename_wins_over_content() -> None:
    # A Pekao-looking body uploaded under an Alior filename goes to Alior
    assert detect_format(ALIOR_FILENAME, PEKAO_CSV).name == "alior"


def test_registry_is_closed_and_ordered() -> None:
    assert [d.name for d in DIALECTS] == ["alior", "pekao", "revolut"]


def test_detect_and_parse_runs_selected_adapter() -> None:
    result = detect_and_parse("upload.csv", REVOLUT_CSV)
    assert result.dialect == "revolut"
    assert len(result.transactions) == 4


def test_preview_statement_parses_without_a_database() -> None:
    from ledger_ingest import preview_statement

    result = preview_statement(PEKAO_FILENAME, PEKAO_CSV)
    assert result.dialect == "pekao"
    assert [str(tx.amount) for tx in result.transactions] == ["-45.99", "50.00"]
