"""Link generators for canonical topologies and link-spec parsing."""

from linksim.topology.topology import (
    Link,
    fullmesh,
    line,
    links_from_config,
    parse_link,
    parse_link_spec,
    ring,
    star,
)

__all__ = [
    "Link",
    "fullmesh",
    "line",
    "links_from_config",
    "parse_link",
    "parse_link_spec",
    "ring",
    "star",
]
