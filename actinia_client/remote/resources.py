# -*- coding: utf-8 -*-
"""
Data Resources - Locations and mapsets of an actinia instance.

Locations and mapsets are thin handles over the discovery endpoints.
Each caches what it has listed once; create a new handle to see
server-side changes.

Author
------
geoint.org

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from typing import Any, Dict, List, Optional


class Mapset:
    """A mapset within a location.

    Parameters
    ----------
    name : str
        Mapset name.
    location : Location
        The location holding this mapset.
    transport : object
        Provides ``get_raster_layers`` and
        ``get_space_time_raster_datasets``.
    """

    def __init__(self, name: str, location: 'Location', transport: Any) -> None:
        self.name = name
        self.location = location
        self._transport = transport
        self._raster_layers: Optional[List[str]] = None
        self._strds: Optional[List[str]] = None

    def get_raster_layers(self) -> List[str]:
        """Raster layer names of this mapset."""
        if self._raster_layers is None:
            self._raster_layers = self._transport.get_raster_layers(
                self.location.name, self.name,
            )
        return list(self._raster_layers)

    def get_space_time_raster_datasets(self) -> List[str]:
        """Space time raster dataset names of this mapset."""
        if self._strds is None:
            self._strds = self._transport.get_space_time_raster_datasets(
                self.location.name, self.name,
            )
        return list(self._strds)

    def __repr__(self) -> str:
        return f"Mapset({self.location.name!r}, {self.name!r})"


class Location:
    """A location (GRASS project) on the actinia instance.

    Parameters
    ----------
    name : str
        Location name.
    transport : object
        Provides ``get_mapsets``.
    """

    def __init__(self, name: str, transport: Any) -> None:
        self.name = name
        self._transport = transport
        self._mapsets: Optional[Dict[str, Mapset]] = None

    def get_mapsets(self) -> List[Mapset]:
        if self._mapsets is None:
            names = self._transport.get_mapsets(self.name)
            self._mapsets = {n: Mapset(n, self, self._transport) for n in names}
        return list(self._mapsets.values())

    def get_mapset(self, name: str) -> Optional[Mapset]:
        """Mapset by name, or None if the location has no such mapset."""
        if self._mapsets is None:
            self.get_mapsets()
        return self._mapsets.get(name)

    def __repr__(self) -> str:
        return f"Location({self.name!r})"
