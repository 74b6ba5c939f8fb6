"""marketing_insights package.

Fetches the campaign performance document published by the marketing data
API, reshapes it into per-breakdown summaries, and serves them through a CLI
and a Streamlit dashboard.

Architecture:
- Ingest: download (and cache) the raw JSON document
- Aggregate: pure functions turning the document into metric records
- Pydantic models describe every derived record
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
