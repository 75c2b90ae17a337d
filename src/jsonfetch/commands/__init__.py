"""Built-in CLI sub-commands for jsonfetch.

* :mod:`~jsonfetch.commands.request` -- ``get``, ``post``, ``put``,
  ``patch``, ``delete``: send a request through the caching dispatcher.
* :mod:`~jsonfetch.commands.cache` -- inspect the configured cache store.
* :mod:`~jsonfetch.commands.config` -- view the effective configuration.

Request commands are plain callbacks registered directly on the root app;
``cache`` and ``config`` are :class:`typer.Typer` sub-applications.
"""
