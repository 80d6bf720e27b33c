# -*- coding: utf-8 -*-
"""
Actinia Client - One-stop access to an actinia instance.

Ties together the HTTP transport, location/mapset discovery, the module
registry, process chain assembly and job submission.

Example::

    client = ActiniaClient("https://actinia.mundialis.de/", user, password)
    region = client.get_module("g.region")
    ivi = client.get_module("i.vi")
    status = client.run_process(
        "nc_spm_08", "astest",
        [region, ivi],
        [{"raster": "lsat7_2000_50@landsat"},
         {"red": "lsat7_2000_30@landsat", "nir": "lsat7_2000_40@landsat",
          "viname": "ndvi", "output": "ndvi"}],
    )
    status.refresh()

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
from typing import Any, Dict, List, Mapping, Optional, Sequence

# Third-party
import requests

# actinia_client internal
from actinia_client.core.chain import ProcessChain, build_process_chain
from actinia_client.core.chainfile import ChainPlan
from actinia_client.core.config import ClientConfig
from actinia_client.core.job import ProcessStatus, submit_process_chain
from actinia_client.core.module import Module
from actinia_client.remote.registry import ModuleRegistry
from actinia_client.remote.resources import Location, Mapset
from actinia_client.remote.transport import ActiniaTransport


class ActiniaClient:
    """Client for one actinia instance.

    Parameters
    ----------
    url : str
        Base URL of the instance, with or without trailing slash.
    username : str
    password : str
    timeout : float
        HTTP timeout in seconds. Default 30.0.
    transport : Optional[ActiniaTransport]
        Use this transport instead of building one from the arguments.
    """

    def __init__(
        self,
        url: str = "",
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
        transport: Optional[ActiniaTransport] = None,
    ) -> None:
        if transport is None:
            if not url:
                raise ValueError("Either url or transport is required")
            transport = ActiniaTransport(url, username, password, timeout)
        self._transport = transport
        self._registry = ModuleRegistry(transport)
        self._locations: Dict[str, Location] = {}
        self._locations_listed = False

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
    ) -> 'ActiniaClient':
        return cls(transport=ActiniaTransport.from_config(config, session))

    @property
    def transport(self) -> ActiniaTransport:
        return self._transport

    @property
    def modules(self) -> ModuleRegistry:
        return self._registry

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> 'ActiniaClient':
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def get_locations(self) -> List[Location]:
        """List the locations, refreshing the location cache."""
        names = self._transport.get_locations()
        locations = []
        for name in names:
            loc = self._locations.get(name) or Location(name, self._transport)
            self._locations[name] = loc
            locations.append(loc)
        self._locations_listed = True
        return locations

    def get_location(self, name: str) -> Optional[Location]:
        if not self._locations_listed:
            self.get_locations()
        return self._locations.get(name)

    def get_mapsets(self, location: str) -> List[Mapset]:
        """List the mapsets of a location, fresh from the instance each call."""
        loc = self._locations.get(location) or Location(location, self._transport)
        names = self._transport.get_mapsets(location)
        return [Mapset(n, loc, self._transport) for n in names]

    def get_raster_layers(self, location: str, mapset: str) -> List[str]:
        return self._transport.get_raster_layers(location, mapset)

    def get_space_time_raster_datasets(self, location: str, mapset: str) -> List[str]:
        return self._transport.get_space_time_raster_datasets(location, mapset)

    def get_modules(self) -> List[Module]:
        return self._registry.list_modules()

    def get_module(self, name: str) -> Optional[Module]:
        return self._registry.get_module(name)

    # ------------------------------------------------------------------
    # Process chains
    # ------------------------------------------------------------------

    def create_process_chain(
        self,
        modules: Sequence[Module],
        parameters: Sequence[Mapping[str, str]],
    ) -> ProcessChain:
        """Build a chain; modules and maps are paired by position."""
        return build_process_chain(modules, parameters)

    def create_process_chain_from_plan(self, plan: ChainPlan) -> ProcessChain:
        """Resolve a plan's module names and build its chain.

        Raises
        ------
        KeyError
            If the plan names a module the instance does not offer.
        """
        modules = self._registry.resolve(plan.module_names())
        return build_process_chain(modules, plan.parameter_maps())

    def submit(self, location: str, mapset: str, chain: ProcessChain) -> ProcessStatus:
        return submit_process_chain(self._transport, location, mapset, chain)

    def run_process(
        self,
        location: str,
        mapset: str,
        modules: Sequence[Module],
        parameters: Sequence[Mapping[str, str]],
    ) -> ProcessStatus:
        """Build a chain from modules and parameter maps and submit it.

        Returns
        -------
        ProcessStatus
            Tracker for the job; call ``refresh()`` to poll it.
        """
        chain = build_process_chain(modules, parameters)
        return self.submit(location, mapset, chain)
