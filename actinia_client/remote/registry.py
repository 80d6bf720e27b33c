# -*- coding: utf-8 -*-
"""
Module Registry - The processing modules an actinia instance offers.

Lists modules once and hands out one Module descriptor per name, so the
lazily fetched parameter lists of a module are shared for the lifetime
of the registry.

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
import logging
from typing import Any, Dict, List, Optional, Sequence

# actinia_client internal
from actinia_client.core.errors import MalformedDescriptor
from actinia_client.core.module import Module

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Cache of Module descriptors backed by the modules endpoint.

    Parameters
    ----------
    transport : object
        Provides ``get_modules()`` and ``fetch_module_detail(name)``.
    """

    def __init__(self, transport: Any) -> None:
        self._transport = transport
        self._modules: Dict[str, Module] = {}
        self._listed = False

    def list_modules(self) -> List[Module]:
        """All modules, listed from the service on first call.

        Raises
        ------
        RemoteUnavailable
            If the listing fails.
        MalformedDescriptor
            If a module record has no ``id``.
        """
        if not self._listed:
            records = self._transport.get_modules()
            for record in records:
                if not isinstance(record, dict) or 'id' not in record:
                    raise MalformedDescriptor("Module record has no 'id'", record)
                name = str(record['id'])
                if name not in self._modules:
                    self._modules[name] = Module(
                        name,
                        str(record.get('description', '')),
                        self._transport.fetch_module_detail,
                    )
            self._listed = True
            logger.debug("Listed %d modules", len(self._modules))
        return list(self._modules.values())

    def get_module(self, name: str) -> Optional[Module]:
        """Module by name, or None if the service does not offer it."""
        if not self._listed:
            self.list_modules()
        return self._modules.get(name)

    def resolve(self, names: Sequence[str]) -> List[Module]:
        """Modules for the given names, in the same order.

        Raises
        ------
        KeyError
            If a name is not offered by the service.
        """
        modules = []
        for name in names:
            module = self.get_module(name)
            if module is None:
                raise KeyError(f"Unknown module {name!r}")
            modules.append(module)
        return modules

    def __contains__(self, name: str) -> bool:
        return self.get_module(name) is not None

    def __len__(self) -> int:
        return len(self.list_modules())
