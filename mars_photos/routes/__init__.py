# Routes package init
"""
Mars Photo API: Routes Package
================================

What:  HTTP route handlers. Each module owns one resource.

Route Inventory:
    - rovers.py:     GET /api/v1/rovers
                     GET /api/v1/rovers/{rover_id}
                     GET /api/v1/rovers/{rover_id}/photos
                     GET /api/v1/rovers/{rover_id}/latest_photos
    - manifests.py:  GET /api/v1/manifests/{rover_id}
    - photos.py:     GET /api/v1/photos/{photo_id}   (always 400)
    - health.py:     GET /health

Handlers stay thin: read parameters, call RoverService, return the
envelope. Raised domain errors are rendered by the handlers in main.py.
"""
