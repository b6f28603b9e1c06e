"""Release synchronization for a package-registry build pipeline.

Lists the git tags of a package, reconciles them with stored releases and
queues build jobs for releases that still need building.
"""

__version__ = "0.1.0"
