"""
Mars Photo API: Package Initializer
=====================================

What: Marks `mars_photos` as a Python package and exposes the version.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same layered shape for every request:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   RoverService (Aggregator)         │  ← Orchestration, validation
    ├─────────────────────────────────────┤
    │ Estimation · Classifier · Calendar  │  ← Pure logic, sampling
    ├─────────────────────────────────────┤
    │      Upstream Adapters (httpx)      │  ← Per-rover feed normalization
    └─────────────────────────────────────┘

    Nothing is persisted. Every response is rebuilt from the upstream feeds.
"""

__version__ = "1.0.0"
