"""Port mappings of a running container."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Ports:
    """Mapping from internal (container) ports to host ports.

    Only ports that are both exposed and published appear here. An exposed
    port without a host binding is treated the same as one never exposed.
    """

    mapping: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_inspect(cls, info: Dict[str, Any]) -> "Ports":
        """Build the table from a single ``docker inspect`` document.

        ``NetworkSettings.Ports`` looks like::

            {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "49153"}],
             "443/tcp": None}

        When a port is bound on several host addresses (IPv4 and IPv6) the
        first binding wins. When the same port number is published for
        several protocols, the ``tcp`` binding wins.
        """
        settings = info.get("NetworkSettings") or {}
        raw_ports = settings.get("Ports") or {}

        mapping: Dict[int, int] = {}
        protocols: Dict[int, str] = {}
        for key, bindings in raw_ports.items():
            if not bindings:
                continue
            internal, _, proto = key.partition("/")
            proto = proto or "tcp"
            try:
                internal_port = int(internal)
            except ValueError:
                logging.debug(f"Skipping unparsable port key: {key}")
                continue
            if internal_port in mapping and (protocols[internal_port] == "tcp" or proto != "tcp"):
                continue
            for binding in bindings:
                host_port = binding.get("HostPort")
                if not host_port:
                    continue
                try:
                    mapping[internal_port] = int(host_port)
                except ValueError:
                    logging.debug(f"Skipping unparsable host port {host_port!r} for {key}")
                    continue
                protocols[internal_port] = proto
                break

        return cls(mapping=mapping)

    def map_to_host_port(self, internal_port: int) -> Optional[int]:
        return self.mapping.get(internal_port)
