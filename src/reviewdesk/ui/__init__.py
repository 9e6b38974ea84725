"""Streamlit UI for ReviewDesk; launch with ``reviewdesk ui``."""
