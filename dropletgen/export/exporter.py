import json
import logging
from typing import Any, Dict, List, Sequence, Union

from dropletgen.core.errors import DropletImportError
from dropletgen.core.types import Droplet, DropletParameter

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "droplets.json"


def droplets_to_json(droplets: Sequence[Droplet]) -> str:
    """
    Serialise droplets to the download format:
    [
      {"id": "...", "parameters": [{"nodeId", "nodeName", "name", "default", "value"}, ...]},
      ...
    ]
    """
    return json.dumps([d.to_dict() for d in droplets], indent=2, ensure_ascii=False)


def _parameter_from_dict(entry: Dict[str, Any]) -> DropletParameter:
    value = entry["value"]
    return DropletParameter(
        node_id=str(entry["nodeId"]),
        node_name=entry.get("nodeName") or "",
        name=entry["name"],
        default=entry.get("default", value),
        value=value,
    )


def droplet_from_dict(entry: Dict[str, Any]) -> Droplet:
    return Droplet(
        id=str(entry["id"]),
        parameters=[_parameter_from_dict(p) for p in entry["parameters"]],
    )


def droplets_from_dicts(entries: Any) -> List[Droplet]:
    """Build droplets from decoded records. Raises DropletImportError when malformed."""
    if not isinstance(entries, list):
        raise DropletImportError("Droplet document must be a JSON array of droplets")
    try:
        return [droplet_from_dict(entry) for entry in entries]
    except (KeyError, TypeError) as e:
        raise DropletImportError(f"Droplet record is missing a field: {e}") from e


def droplets_from_json(text: Union[str, bytes]) -> List[Droplet]:
    """Parse an uploaded droplet document. Raises DropletImportError when malformed."""
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        doc = json.loads(text)
    except UnicodeDecodeError as e:
        raise DropletImportError(f"Droplet file is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise DropletImportError(f"Droplet file is not valid JSON: {e}") from e
    return droplets_from_dicts(doc)


def export_droplets(droplets: Sequence[Droplet], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(droplets_to_json(droplets))
    logger.info("Exported %d droplets to %s", len(droplets), path)


def import_droplets(path: str) -> List[Droplet]:
    with open(path, "rb") as f:
        return droplets_from_json(f.read())
