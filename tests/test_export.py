"""
Unit tests for CSV export formatting.
"""

from datetime import date

import pandas as pd

from analytics.aggregation import donations_only
from analytics.export import DEMOGRAPHICS_COLUMNS, demographics_export, export_filename, to_csv_bytes


def test_columns_and_order(transactions_df):
    out = demographics_export(donations_only(transactions_df))
    assert list(out.columns) == DEMOGRAPHICS_COLUMNS
    assert len(out) == 4


def test_values(transactions_df):
    out = demographics_export(donations_only(transactions_df))
    first = out.iloc[0]
    assert first["Donor Name"] == "Ann Lee"
    assert first["Email"] == "A@x.com"
    assert first["Amount"] == 50.0
    # name assembled from first/last when donor_name is missing
    assert out.iloc[3]["Donor Name"] == "Cy Dee"
    # missing occupation exported as empty
    assert out.iloc[2]["Occupation"] == ""


def test_missing_columns_become_empty():
    out = demographics_export(pd.DataFrame({"amount": [5.0], "donor_email": ["x@y.z"]}))
    assert out.iloc[0]["State"] == ""
    assert out.iloc[0]["Donor Name"] == ""


def test_empty_frame():
    out = demographics_export(pd.DataFrame())
    assert out.empty
    assert list(out.columns) == DEMOGRAPHICS_COLUMNS
    assert to_csv_bytes(out).decode("utf-8").strip() == ",".join(DEMOGRAPHICS_COLUMNS)


def test_csv_quotes_commas_and_quotes():
    df = pd.DataFrame({"Employer": ['Smith, Jones & "Co"'], "City": ["Austin"]})
    text = to_csv_bytes(df).decode("utf-8")
    assert text.splitlines()[1] == '"Smith, Jones & ""Co""",Austin'


def test_filename():
    assert export_filename("donor-demographics", date(2025, 3, 7)) == "donor-demographics-2025-03-07.csv"
