"""
Application package initializer.

The API is split into a storage layer (``core.db``), request
handlers grouped by API version (``api/v1/endpoints``), Pydantic
payload schemas (``schemas``) and the application factory
(``main``).  Import ``create_app`` from ``travel_list_api.app.main``
to build an application instance.
"""
