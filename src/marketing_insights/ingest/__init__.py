"""Data-source helpers: download and cache the marketing document."""
