# ruff: noqa: E501
"""Small bank exports used across the test suite (real header layouts, fake data)."""

from __future__ import annotations

import textwrap


def dedent(s: str) -> str:
    # Keep internal newlines, but normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n")


def double_encode(text: str) -> str:
    """Simulate a UTF-8 file that was read as Latin-1 and saved again."""

    return text.encode("utf-8").decode("latin-1")


ALIOR_FILENAME = "Historia_Operacji_2026-02-23_10-00-00.csv"
PEKAO_FILENAME = "Lista_operacji_20260223_100000.csv"
REVOLUT_FILENAME = "account-statement_2026-02-01_2026-02-23_pl-pl_abc123.csv"

ALIOR_HEADER = (
    "Data transakcji;Data księgowania;Nazwa nadawcy;Nazwa odbiorcy;Szczegóły transakcji;"
    "Kwota operacji;Waluta operacji;Kwota w walucie rachunku;Waluta rachunku;"
    "Numer rachunku nadawcy;Numer rachunku odbiorcy"
)

ALIOR_CSV = dedent(
    """
    Kryteria transakcji: od 01-02-2026 do 23-02-2026
    Data transakcji;Data księgowania;Nazwa nadawcy;Nazwa odbiorcy;Szczegóły transakcji;Kwota operacji;Waluta operacji;Kwota w walucie rachunku;Waluta rachunku;Numer rachunku nadawcy;Numer rachunku odbiorcy
    05-02-2026;05-02-2026;ACME SP. Z O.O.;JAN KOWALSKI;Wynagrodzenie luty;340,00;PLN;340,00;PLN;11 1111;22 2222
    10-02-2026;11-02-2026;JAN KOWALSKI;SPÓŁDZIELNIA MIESZKANIOWA;Czynsz luty;-1 180,00;PLN;-1 180,00;PLN;22 2222;33 3333
    12-02-2026;13-02-2026;;;ZABKA Z1234 WARSZAWA;-7,19;PLN;-7,19;PLN;;
    """
)

PEKAO_CSV = dedent(
    """
    Data księgowania;Data waluty;Nadawca / Odbiorca;Adres nadawcy / odbiorcy;Rachunek źródłowy;Rachunek docelowy;Tytułem;Kwota operacji;Waluta;Numer referencyjny;Typ operacji;Kategoria
    03.02.2026;02.02.2026;BIEDRONKA 123;UL. DŁUGA 1 WARSZAWA;'12345;'67890;Zakupy spożywcze;-45,99;PLN;'C123456789;TRANSAKCJA KARTĄ;Jedzenie
    05.02.2026;05.02.2026;JAN KOWALSKI;;'111;'222;Zwrot za obiad;50,00;PLN;'C987;PRZELEW PRZYCHODZĄCY;
    """
)

REVOLUT_CSV = dedent(
    """
    Rodzaj,Produkt,Data rozpoczęcia,Data zrealizowania,Opis,Kwota,Opłata,Waluta,State,Saldo
    Płatność kartą,Bieżące,2026-02-01 10:15:00,2026-02-02 08:00:00,Steam,-49.99,0.00,PLN,ZAKOŃCZONO,950.01
    Przelew,Bieżące,2026-02-03 09:00:00,2026-02-03 09:01:00,Przelew do: JAN KOWALSKI,-100.00,0.00,PLN,ZAKOŃCZONO,850.01
    Doładowanie,Bieżące,2026-02-04 12:00:00,,Zasilenie o *3821,200.00,0.00,PLN,OCZEKUJĄCA,1050.01
    Płatność kartą,Bieżące,2026-02-05 12:00:00,2026-02-06 12:00:00,Uber,-15.00,0.00,PLN,COFNIĘTO,1050.01
    """
)
