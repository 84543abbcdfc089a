"""Infrastructure domain — rule catalog, corpus reading, and session settings.

Nothing is re-exported here: these modules depend on ``lintseed.autoconfig``
types, and ``lintseed.autoconfig`` imports the settings module back.  Import
them directly::

    from lintseed.infrastructure.catalog import load_catalog
    from lintseed.infrastructure.settings import load_settings
"""

# lintseed:domain=infrastructure
