"""
Pure helpers over already-fetched rows.

Nothing here talks to the backend or to Streamlit; every function takes and
returns plain values or pandas DataFrames so the views stay thin.
"""
