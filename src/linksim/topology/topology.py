from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

Link = Tuple[int, int]


def _normalize(links: Iterable[Link]) -> List[Link]:
    seen: set[Link] = set()
    out: List[Link] = []
    for u, v in links:
        if u == v:
            continue
        key = (min(u, v), max(u, v))
        if key in seen:
            continue
        seen.add(key)
        out.append((int(u), int(v)))
    return out


def line(n_nodes: int) -> List[Link]:
    return _normalize((i, i + 1) for i in range(1, n_nodes))


def ring(n_nodes: int) -> List[Link]:
    if n_nodes < 3:
        return line(n_nodes)
    return _normalize((i, i % n_nodes + 1) for i in range(1, n_nodes + 1))


def star(n_nodes: int, center: int = 1) -> List[Link]:
    center = max(1, min(int(center), n_nodes))
    return _normalize((center, i) for i in range(1, n_nodes + 1) if i != center)


def fullmesh(n_nodes: int) -> List[Link]:
    return _normalize((u, v) for u in range(1, n_nodes + 1) for v in range(u + 1, n_nodes + 1))


def parse_link_spec(raw: str) -> Link:
    """Parse ``"src-dst"`` into a link tuple."""
    parts = str(raw).split("-")
    if len(parts) != 2:
        raise ValueError(f"invalid link {raw!r}: use source-destination")
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError as exc:
        raise ValueError(f"invalid link {raw!r}: node ids must be numbers") from exc


def parse_link(item: Any) -> Link:
    if isinstance(item, str):
        return parse_link_spec(item)
    if isinstance(item, dict):
        return int(item["src"]), int(item["dst"])
    if isinstance(item, (list, tuple)) and len(item) == 2:
        return int(item[0]), int(item[1])
    raise ValueError(f"invalid link entry: {item!r}")


def links_from_config(cfg: Dict[str, Any], n_nodes: int) -> List[Link]:
    """Links for a ``topology`` config section.

    ``type`` selects a generated shape; ``links`` lists extra or explicit
    directed connections. Both may be given.
    """
    tp = cfg.get("type")
    links: List[Link] = []
    if tp in (None, "", "custom"):
        pass
    elif tp in ("line", "bus"):
        links.extend(line(n_nodes))
    elif tp == "ring":
        links.extend(ring(n_nodes))
    elif tp == "star":
        links.extend(star(n_nodes, int(cfg.get("center", 1))))
    elif tp in ("fullmesh", "mesh"):
        links.extend(fullmesh(n_nodes))
    else:
        raise ValueError(f"Unsupported topology type: {tp}")
    links.extend(parse_link(item) for item in cfg.get("links", []) or [])
    return links
