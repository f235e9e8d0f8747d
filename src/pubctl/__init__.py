"""pubctl — command dispatch and build lifecycle for publication controllers.

Each site's own controller script builds a
:class:`~pubctl.core.models.CommandSpecOptions` and hands it to
:func:`pubctl.cli.app.main`; everything common to all publications
(prepare/build/finalize hooks, clean, update, version) lives here.
"""

from pubctl.version import __version__

__all__: list[str] = ["__version__"]
