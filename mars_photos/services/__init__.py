# Services package init
"""
Mars Photo API: Services Layer
================================

What:  Everything between the routes and the upstream feeds.

Service Inventory:
    - rover_registry:      Static rover and camera catalog
    - camera_classifier:   Instrument name → FHAZ / RHAZ / MAST category
    - sol_calendar:        Sol ↔ Earth date conversion
    - upstream_base:       UpstreamAdapter interface and shared fetch/parse helpers
    - curiosity_service:   Adapter for the Curiosity raw image feed
    - perseverance_service: Adapter for the Perseverance raw image feed
    - adapter_factory:     Rover → adapter lookup
    - estimation_service:  Sol sampling and photo-count estimation
    - rover_service:       Request orchestration used by the routes
"""
