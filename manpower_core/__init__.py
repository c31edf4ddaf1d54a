"""Core (UI-agnostic) manpower dashboard logic.

This package contains:
- roster loading (XLSX/CSV -> pandas -> immutable driver records)
- unit grouping and the reserve (spare) pool
- the daily aggregation engine (per-day, per-shift categorized views)
- page compute functions (JSON-serializable payloads, display tables)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
