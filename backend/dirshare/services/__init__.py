"""File-serving services: resolution, listing, caching, ranges and delivery.

Instances are created by ``dirshare.main.create_app`` and owned by the app
(``app.state``); nothing here keeps process-wide state.
"""
